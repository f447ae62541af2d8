"""Conversion between NetworkX graphs and netflow inputs.

Node names (any hashable) are mapped to contiguous vertex indices, sorted by
``str`` for deterministic ordering. The returned ``NodeMap`` translates
results back to the original names.

Example:
    >>> import networkx as nx
    >>> G = nx.DiGraph()
    >>> G.add_edge("s", "a", capacity=3.0)
    >>> G.add_edge("a", "t", capacity=2.0)
    >>> network, node_map = from_networkx(G, "s", "t")
    >>> node_map.to_index["s"], network.sink == node_map.to_index["t"]
    (1, True)
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

import networkx as nx

from netflow.graph.network import FlowNetwork
from netflow.types.base import CostEdgeSpec, VertexID


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex indices.

    Attributes:
        to_index: Maps original node names to vertex indices.
        to_name: Maps vertex indices back to original node names.
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> NodeMap:
        """Create a NodeMap from node names given in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


def _check_graph(G) -> None:
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )


def _node_map(G) -> NodeMap:
    return NodeMap.from_names(sorted(G.nodes(), key=str))


def _directed_edges(G) -> Iterator[Tuple[Hashable, Hashable, dict]]:
    """Yield ``(u, v, data)`` once per arc; undirected edges yield both ways."""
    for u, v, data in G.edges(data=True):
        yield u, v, data
        if not G.is_directed():
            yield v, u, data


def from_networkx(
    G,
    source: Hashable,
    sink: Hashable,
    *,
    capacity_attr: str = "capacity",
    default_capacity: float = 1.0,
) -> Tuple[FlowNetwork, NodeMap]:
    """Convert a NetworkX graph into a ``FlowNetwork``.

    Parallel edges are merged by summing their capacities. Undirected edges
    become one arc in each direction. Self-loops carry no flow and are
    skipped.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        source: Name of the source node.
        sink: Name of the sink node.
        capacity_attr: Edge attribute holding capacity.
        default_capacity: Capacity used when the attribute is missing.

    Returns:
        Tuple of ``(network, node_map)``.

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
        ValueError: If a terminal is not in the graph or source equals sink.
    """
    _check_graph(G)
    for role, name in (("source", source), ("sink", sink)):
        if name not in G:
            raise ValueError(f"{role.capitalize()} node '{name}' is not in the graph.")

    node_map = _node_map(G)
    merged: Dict[Tuple[int, int], float] = defaultdict(float)
    for u, v, data in _directed_edges(G):
        if u == v:
            continue
        key = (node_map.to_index[u], node_map.to_index[v])
        merged[key] += data.get(capacity_attr, default_capacity)

    network = FlowNetwork(
        len(node_map), node_map.to_index[source], node_map.to_index[sink]
    )
    for (u, v), capacity in merged.items():
        network.add_edge(u, v, capacity)
    return network, node_map


def cost_edges_from_networkx(
    G,
    *,
    capacity_attr: str = "capacity",
    cost_attr: str = "cost",
    default_capacity: float = 1.0,
    default_cost: float = 0.0,
) -> Tuple[List[CostEdgeSpec], NodeMap]:
    """Convert a NetworkX graph into an edge list for ``min_cost_max_flow``.

    Parallel edges are kept separate since they may differ in cost.

    Returns:
        Tuple of ``(edges, node_map)`` with ``edges`` as
        ``(u, v, capacity, cost)`` tuples over vertex indices.

    Raises:
        TypeError: If ``G`` is not a NetworkX graph.
    """
    _check_graph(G)
    node_map = _node_map(G)
    edges: List[CostEdgeSpec] = [
        (
            node_map.to_index[u],
            node_map.to_index[v],
            data.get(capacity_attr, default_capacity),
            data.get(cost_attr, default_cost),
        )
        for u, v, data in _directed_edges(G)
    ]
    return edges, node_map


def to_networkx(
    network: FlowNetwork, node_map: Optional[NodeMap] = None
) -> nx.DiGraph:
    """Export the real edges of ``network`` with their current flow.

    Args:
        network: Network to export.
        node_map: Mapping back to original names; vertex indices are used
            when omitted.

    Returns:
        nx.DiGraph: One edge per positive-capacity pair with ``capacity`` and
        ``flow`` attributes. Terminals are recorded in ``graph.graph``.
    """

    def name(vertex: VertexID) -> Hashable:
        return node_map.to_name[vertex] if node_map is not None else vertex

    G = nx.DiGraph(source=name(network.source), sink=name(network.sink))
    G.add_nodes_from(name(v) for v in range(network.vertex_count))
    for edge in network.to_edge_list():
        G.add_edge(
            name(edge.source),
            name(edge.target),
            capacity=edge.capacity,
            flow=edge.flow,
        )
    return G
