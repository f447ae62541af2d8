"""Dense capacity/flow matrix representation of a single-commodity network.

`FlowNetwork` stores capacities and flows as ``n x n`` numpy matrices. The
residual graph is never materialized: ``residual(u, v)`` is recomputed from
the two matrices on demand. Flow is mutated only through ``add_flow``, which
keeps the flow matrix antisymmetric.
"""

from __future__ import annotations

import math
from operator import index
from typing import Iterable, List

import numpy as np

from netflow.logging import get_logger
from netflow.types.base import Capacity, EdgeSpec, VertexID
from netflow.types.dto import FlowEdge

logger = get_logger(__name__)


class FlowNetwork:
    """A directed capacitated network with a fixed source and sink.

    Attributes:
        vertex_count: Number of vertices; vertices are ``0 .. vertex_count-1``.
        source: Source vertex.
        sink: Sink vertex.
        capacity: ``capacity[u][v]`` is the capacity of edge ``u -> v`` (0 if absent).
        flow: ``flow[u][v]`` is the net flow from ``u`` to ``v``; always
            equal to ``-flow[v][u]``.
    """

    def __init__(self, vertex_count: int, source: VertexID, sink: VertexID) -> None:
        """Create an edgeless network.

        Args:
            vertex_count: Number of vertices (at least 2).
            source: Source vertex index.
            sink: Sink vertex index.

        Raises:
            ValueError: If the vertex count is too small, a terminal is out of
                range, or source and sink coincide.
        """
        vertex_count = index(vertex_count)
        if vertex_count < 2:
            raise ValueError(
                f"A flow network needs at least 2 vertices, got {vertex_count}."
            )
        self.vertex_count: int = vertex_count
        self.source: VertexID = self._check_vertex(source, "source")
        self.sink: VertexID = self._check_vertex(sink, "sink")
        if self.source == self.sink:
            raise ValueError(f"Source and sink must differ (both are {source}).")

        self.capacity: np.ndarray = np.zeros((vertex_count, vertex_count))
        self.flow: np.ndarray = np.zeros((vertex_count, vertex_count))

    @classmethod
    def from_edges(
        cls,
        vertex_count: int,
        edges: Iterable[EdgeSpec],
        source: VertexID,
        sink: VertexID,
    ) -> FlowNetwork:
        """Build a network from ``(u, v, capacity)`` triples.

        Args:
            vertex_count: Number of vertices.
            edges: Edge triples, added in order.
            source: Source vertex index.
            sink: Sink vertex index.

        Returns:
            FlowNetwork: The populated network with zero flow.
        """
        network = cls(vertex_count, source, sink)
        for u, v, capacity in edges:
            network.add_edge(u, v, capacity)
        return network

    def _check_vertex(self, vertex: VertexID, role: str = "vertex") -> VertexID:
        vertex = index(vertex)
        if not 0 <= vertex < self.vertex_count:
            raise ValueError(
                f"{role.capitalize()} {vertex} is out of range "
                f"[0, {self.vertex_count})."
            )
        return vertex

    def __repr__(self) -> str:
        return (
            f"FlowNetwork(vertex_count={self.vertex_count}, source={self.source}, "
            f"sink={self.sink}, edges={self.edge_count})"
        )

    #
    # Construction
    #
    def add_edge(self, u: VertexID, v: VertexID, capacity: Capacity) -> None:
        """Add the directed edge ``u -> v``.

        Adding an edge that already exists replaces its capacity.

        Raises:
            ValueError: If an endpoint is out of range, ``u == v``, or the
                capacity is negative, infinite or NaN.
        """
        u = self._check_vertex(u, "from vertex")
        v = self._check_vertex(v, "to vertex")
        if u == v:
            raise ValueError(f"Self-loop on vertex {u} cannot carry flow.")
        if not math.isfinite(capacity):
            raise ValueError(f"Edge ({u}, {v}) has non-finite capacity {capacity}.")
        if capacity < 0:
            raise ValueError(f"Edge ({u}, {v}) has negative capacity {capacity}.")
        if self.capacity[u, v] > 0:
            logger.debug(
                "Replacing capacity of edge (%d, %d): %s -> %s",
                u,
                v,
                self.capacity[u, v],
                capacity,
            )
        self.capacity[u, v] = capacity

    @property
    def edge_count(self) -> int:
        """Number of positive-capacity edges."""
        return int(np.count_nonzero(self.capacity > 0))

    #
    # Residual queries
    #
    def residual(self, u: VertexID, v: VertexID) -> float:
        """Residual capacity ``capacity[u][v] - flow[u][v]``."""
        return float(self.capacity[u, v] - self.flow[u, v])

    def residual_neighbors(self, u: VertexID, tolerance: float = 0.0) -> List[int]:
        """Vertices reachable from ``u`` over one residual arc, ascending.

        Args:
            u: Vertex to expand.
            tolerance: Residual capacity at or below this is ignored.

        Returns:
            List[int]: Indices ``v`` with ``residual(u, v) > tolerance``.
        """
        row = self.capacity[u] - self.flow[u]
        return np.flatnonzero(row > tolerance).tolist()

    def residual_predecessors(self, v: VertexID, tolerance: float = 0.0) -> List[int]:
        """Vertices ``u`` with ``residual(u, v) > tolerance``, ascending."""
        column = self.capacity[:, v] - self.flow[:, v]
        return np.flatnonzero(column > tolerance).tolist()

    #
    # Flow mutation
    #
    def add_flow(self, u: VertexID, v: VertexID, amount: Capacity) -> None:
        """Send ``amount`` along ``u -> v`` and cancel it on ``v -> u``."""
        self.flow[u, v] += amount
        self.flow[v, u] -= amount

    def reset_flow(self) -> None:
        """Zero the flow matrix."""
        self.flow.fill(0.0)

    def current_flow(self) -> float:
        """Net flow leaving the source."""
        return float(self.flow[self.source].sum())

    def total_capacity_out_of_source(self) -> float:
        """Upper bound on any feasible flow value."""
        return float(self.capacity[self.source].sum())

    #
    # Export
    #
    def to_edge_list(self) -> List[FlowEdge]:
        """Return every positive-capacity edge with its current flow.

        Edges are ordered by ``(source, target)``.
        """
        us, vs = np.nonzero(self.capacity > 0)
        return [
            FlowEdge(
                source=int(u),
                target=int(v),
                capacity=float(self.capacity[u, v]),
                flow=float(self.flow[u, v]),
            )
            for u, v in zip(us, vs)
        ]

    def copy(self) -> FlowNetwork:
        """Return an independent deep copy, flow included."""
        clone = FlowNetwork.__new__(FlowNetwork)
        clone.vertex_count = self.vertex_count
        clone.source = self.source
        clone.sink = self.sink
        clone.capacity = self.capacity.copy()
        clone.flow = self.flow.copy()
        return clone
