"""Minimum cut extraction from a completed max-flow.

The source side of the cut is everything reachable from the source over
arcs with positive residual capacity. By max-flow/min-cut duality the
capacity of the edges leaving that set equals the flow value.
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional

from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.types.dto import FlowEdge, MinCut


def residual_reachable(
    network: FlowNetwork, tolerance: Optional[float] = None
) -> List[bool]:
    """Mark vertices reachable from the source in the residual graph.

    Args:
        network: Network holding a flow.
        tolerance: Residual capacity at or below this is not traversed.

    Returns:
        List[bool]: ``reached[v]`` is True when ``v`` is reachable.
    """
    tolerance = FLOW_CONFIG.resolve_tolerance(tolerance)
    reached = [False] * network.vertex_count
    reached[network.source] = True
    queue = deque([network.source])
    while queue:
        u = queue.popleft()
        for v in network.residual_neighbors(u, tolerance):
            if not reached[v]:
                reached[v] = True
                queue.append(v)
    return reached


def find_min_cut(network: FlowNetwork, tolerance: Optional[float] = None) -> MinCut:
    """Extract the minimum s-t cut implied by the network's current flow.

    Only meaningful once the flow is maximum; on a partial flow the source
    set may contain the sink.

    Args:
        network: Network holding a maximum flow.
        tolerance: Residual capacity at or below this counts as saturated.

    Returns:
        MinCut: Source set, sink set and the real edges crossing between them.
    """
    reached = residual_reachable(network, tolerance)
    source_set = tuple(v for v in range(network.vertex_count) if reached[v])
    sink_set = tuple(v for v in range(network.vertex_count) if not reached[v])

    cut_edges = tuple(
        FlowEdge(
            source=u,
            target=v,
            capacity=float(network.capacity[u, v]),
            flow=float(network.flow[u, v]),
        )
        for u in source_set
        for v in sink_set
        if network.capacity[u, v] > 0
    )
    return MinCut(source_set=source_set, sink_set=sink_set, cut_edges=cut_edges)
