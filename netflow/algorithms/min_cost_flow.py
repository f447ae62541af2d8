"""Min-cost max-flow by successive shortest paths.

The residual graph is an adjacency list: every input edge contributes a
forward arc ``(v, capacity, cost)`` and a paired reverse arc ``(u, 0, -cost)``
that can cancel flow later. Each round finds the cheapest source-to-sink path
with a queue-based label-correcting search (reverse arcs carry negative
costs, so Dijkstra without potentials does not apply), pushes the path's
bottleneck, and stops once the sink is unreachable. Augmenting only along
cheapest paths keeps the residual graph free of negative cycles, which makes
every intermediate flow cost-optimal for its value.

Unlike the matrix engines this representation is O(V + E) in memory and
supports parallel edges with different costs.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from operator import index
from typing import List, Optional, Sequence, Tuple

from netflow.config import FLOW_CONFIG
from netflow.logging import get_logger
from netflow.types.base import CostEdgeSpec, VertexID
from netflow.types.dto import AugmentedPath, FlowEdge, MinCostFlowResult

logger = get_logger(__name__)


@dataclass
class ResidualArc:
    """One arc of the residual adjacency list.

    Attributes:
        target: Head vertex.
        capacity: Remaining residual capacity.
        cost: Per-unit cost (negated on reverse arcs).
        rev: Index of the paired arc in ``graph[target]``.
        edge_index: Input edge index for forward arcs, ``None`` for reverse arcs.
    """

    target: VertexID
    capacity: float
    cost: float
    rev: int
    edge_index: Optional[int] = None


ResidualGraph = List[List[ResidualArc]]


def build_residual_graph(
    vertex_count: int, edges: Sequence[CostEdgeSpec]
) -> ResidualGraph:
    """Build the residual adjacency list for ``edges``.

    Raises:
        ValueError: If an endpoint is out of range, a capacity is negative
            or non-finite, or a cost is non-finite.
    """
    graph: ResidualGraph = [[] for _ in range(vertex_count)]
    for i, (u, v, capacity, cost) in enumerate(edges):
        u, v = index(u), index(v)
        for role, vertex in (("from", u), ("to", v)):
            if not 0 <= vertex < vertex_count:
                raise ValueError(
                    f"Edge {i}: {role} vertex {vertex} is out of range "
                    f"[0, {vertex_count})."
                )
        if not math.isfinite(capacity):
            raise ValueError(
                f"Edge {i} ({u}, {v}) has non-finite capacity {capacity}."
            )
        if capacity < 0:
            raise ValueError(f"Edge {i} ({u}, {v}) has negative capacity {capacity}.")
        if not math.isfinite(cost):
            raise ValueError(f"Edge {i} ({u}, {v}) has non-finite cost {cost}.")
        # For a self-loop the reverse arc lands in the same list, one slot later
        forward_rev = len(graph[v]) + (1 if u == v else 0)
        graph[u].append(ResidualArc(v, float(capacity), float(cost), forward_rev, i))
        graph[v].append(ResidualArc(u, 0.0, -float(cost), len(graph[u]) - 1))
    return graph


def cheapest_path_tree(
    graph: ResidualGraph, source: VertexID, tolerance: float
) -> Tuple[List[float], List[int], List[int]]:
    """Label-correcting shortest paths from ``source`` (SPFA).

    Args:
        graph: Residual adjacency list.
        source: Start vertex.
        tolerance: Arcs with residual capacity at or below this are skipped.

    Returns:
        Tuple of ``(dist, parent, parent_arc)``; ``dist[v]`` is ``math.inf``
        for unreachable vertices.

    Raises:
        ValueError: If a negative-cost cycle is reachable from ``source``.
    """
    n = len(graph)
    dist = [math.inf] * n
    parent = [-1] * n
    parent_arc = [-1] * n
    in_queue = [False] * n
    enqueued = [0] * n

    dist[source] = 0.0
    queue = deque([source])
    in_queue[source] = True
    enqueued[source] = 1

    while queue:
        u = queue.popleft()
        in_queue[u] = False
        for i, arc in enumerate(graph[u]):
            if arc.capacity <= tolerance:
                continue
            candidate = dist[u] + arc.cost
            if candidate < dist[arc.target]:
                v = arc.target
                dist[v] = candidate
                parent[v] = u
                parent_arc[v] = i
                if not in_queue[v]:
                    enqueued[v] += 1
                    if enqueued[v] > n:
                        raise ValueError(
                            f"Negative-cost cycle detected through vertex {v}."
                        )
                    queue.append(v)
                    in_queue[v] = True
    return dist, parent, parent_arc


def min_cost_max_flow(
    vertex_count: int,
    edges: Sequence[CostEdgeSpec],
    source: VertexID,
    sink: VertexID,
    *,
    tolerance: Optional[float] = None,
) -> MinCostFlowResult:
    """Compute a maximum flow of minimum total cost.

    Args:
        vertex_count: Number of vertices.
        edges: ``(u, v, capacity, cost)`` tuples; parallel edges are allowed.
        source: Source vertex.
        sink: Sink vertex.
        tolerance: Residual threshold; defaults to ``FLOW_CONFIG.tolerance``.

    Returns:
        MinCostFlowResult: Flow value, its cost, per-edge flows in input
        order, and each augmentation with its per-unit path cost.

    Raises:
        ValueError: On out-of-range vertices, equal terminals, negative or
            non-finite capacities, or a negative-cost cycle in the input.
        TypeError: If a vertex index is not an integer.

    Examples:
        >>> edges = [(0, 1, 5, 1), (1, 2, 5, 1), (0, 2, 3, 10)]
        >>> result = min_cost_max_flow(3, edges, 0, 2)
        >>> result.max_flow, result.min_cost
        (8.0, 40.0)
    """
    tolerance = FLOW_CONFIG.resolve_tolerance(tolerance)
    vertex_count = index(vertex_count)
    source, sink = index(source), index(sink)
    for role, vertex in (("source", source), ("sink", sink)):
        if not 0 <= vertex < vertex_count:
            raise ValueError(
                f"{role.capitalize()} {vertex} is out of range [0, {vertex_count})."
            )
    if source == sink:
        raise ValueError(f"Source and sink must differ (both are {source}).")

    graph = build_residual_graph(vertex_count, edges)
    logger.debug(
        "Running min-cost max-flow: %d vertices, %d edges, %d -> %d",
        vertex_count,
        len(edges),
        source,
        sink,
    )

    max_flow = 0.0
    min_cost = 0.0
    paths: List[AugmentedPath] = []

    while True:
        dist, parent, parent_arc = cheapest_path_tree(graph, source, tolerance)
        if dist[sink] == math.inf:
            break

        path = [sink]
        bottleneck = math.inf
        while path[-1] != source:
            v = path[-1]
            u = parent[v]
            bottleneck = min(bottleneck, graph[u][parent_arc[v]].capacity)
            path.append(u)
        path.reverse()

        for v in path[1:]:
            u = parent[v]
            arc = graph[u][parent_arc[v]]
            arc.capacity -= bottleneck
            graph[v][arc.rev].capacity += bottleneck

        max_flow += bottleneck
        min_cost += bottleneck * dist[sink]
        paths.append(AugmentedPath(path=tuple(path), flow=bottleneck, cost=dist[sink]))
        logger.debug(
            "Augmented %s along %s at unit cost %s", bottleneck, path, dist[sink]
        )

    flow_edges = _collect_flow_edges(graph, edges)
    logger.debug("Min-cost max-flow finished: flow=%s, cost=%s", max_flow, min_cost)
    return MinCostFlowResult(
        max_flow=max_flow,
        min_cost=min_cost,
        flow_edges=flow_edges,
        paths=tuple(paths),
    )


def _collect_flow_edges(
    graph: ResidualGraph, edges: Sequence[CostEdgeSpec]
) -> Tuple[FlowEdge, ...]:
    """Map forward arcs back to their input edges, preserving input order."""
    remaining = {}
    for arcs in graph:
        for arc in arcs:
            if arc.edge_index is not None:
                remaining[arc.edge_index] = arc.capacity

    flow_edges = []
    for i, (u, v, capacity, cost) in enumerate(edges):
        if capacity <= 0:
            continue
        flow_edges.append(
            FlowEdge(
                source=index(u),
                target=index(v),
                capacity=float(capacity),
                flow=float(capacity) - remaining[i],
                cost=cost,
            )
        )
    return tuple(flow_edges)
