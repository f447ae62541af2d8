"""Augmenting-path maximum flow: Ford-Fulkerson and Edmonds-Karp.

Both algorithms share one loop: find a source-to-sink path of positive
residual arcs, push its bottleneck along every arc, repeat until no path
remains. They differ only in how the path is found:

  - Ford-Fulkerson uses depth-first search, accepting any path. Termination
    on integer capacities is guaranteed, but the iteration count can grow
    with the flow value.
  - Edmonds-Karp uses breadth-first search, always augmenting along a
    fewest-edge path, which bounds iterations by O(V*E).
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterator, List, Optional

from netflow.algorithms.result import build_max_flow_result
from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.base import Algorithm, VertexID
from netflow.types.dto import MaxFlowResult

logger = get_logger(__name__)

Path = List[VertexID]
PathFinder = Callable[[FlowNetwork, float], Path]


def dfs_augmenting_path(network: FlowNetwork, tolerance: float) -> Path:
    """Find any augmenting path by depth-first search.

    The search keeps an explicit stack instead of recursing. Frames live in
    an arena indexed by vertex: ``frames[v]`` iterates the residual
    neighbors of ``v`` not yet tried. A vertex is visited at most once per
    search.

    Args:
        network: Network with the current flow.
        tolerance: Residual capacity at or below this is not traversed.

    Returns:
        Path: Vertices from source to sink, or an empty list if the sink is
        unreachable.
    """
    source, sink = network.source, network.sink
    visited = [False] * network.vertex_count
    frames: List[Optional[Iterator[int]]] = [None] * network.vertex_count

    visited[source] = True
    frames[source] = iter(network.residual_neighbors(source, tolerance))
    stack: Path = [source]

    while stack:
        u = stack[-1]
        if u == sink:
            return stack
        for v in frames[u]:  # type: ignore[union-attr]
            if not visited[v]:
                visited[v] = True
                frames[v] = iter(network.residual_neighbors(v, tolerance))
                stack.append(v)
                break
        else:
            # Dead end: every neighbor tried
            frames[u] = None
            stack.pop()
    return []


def bfs_augmenting_path(network: FlowNetwork, tolerance: float) -> Path:
    """Find a fewest-edge augmenting path by breadth-first search.

    Args:
        network: Network with the current flow.
        tolerance: Residual capacity at or below this is not traversed.

    Returns:
        Path: Vertices from source to sink, or an empty list if the sink is
        unreachable.
    """
    source, sink = network.source, network.sink
    parent = [-1] * network.vertex_count
    parent[source] = source
    queue = deque([source])

    while queue:
        u = queue.popleft()
        for v in network.residual_neighbors(u, tolerance):
            if parent[v] != -1:
                continue
            parent[v] = u
            if v == sink:
                path = [sink]
                while path[-1] != source:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            queue.append(v)
    return []


def path_bottleneck(network: FlowNetwork, path: Path) -> float:
    """Minimum residual capacity over consecutive arcs of ``path``."""
    return min(network.residual(u, v) for u, v in zip(path, path[1:]))


def augment_path(network: FlowNetwork, path: Path, amount: float) -> None:
    """Push ``amount`` along every arc of ``path``."""
    for u, v in zip(path, path[1:]):
        network.add_flow(u, v, amount)


def _augment_until_saturated(
    network: FlowNetwork,
    find_path: PathFinder,
    algorithm: Algorithm,
    tolerance: Optional[float],
) -> MaxFlowResult:
    tolerance = FLOW_CONFIG.resolve_tolerance(tolerance)
    network.reset_flow()
    logger.debug("Running %s on %r", algorithm.label, network)

    iterations = 0
    augmentations = 0
    while True:
        iterations += 1
        path = find_path(network, tolerance)
        if not path:
            break
        bottleneck = path_bottleneck(network, path)
        augment_path(network, path, bottleneck)
        augmentations += 1
        logger.debug("Augmented %s along %s", bottleneck, path)

    return build_max_flow_result(
        network,
        network.current_flow(),
        iterations=iterations,
        algorithm=algorithm,
        stats={"augmentations": augmentations},
        tolerance=tolerance,
    )


def ford_fulkerson(
    network: FlowNetwork, *, tolerance: Optional[float] = None
) -> MaxFlowResult:
    """Compute max flow with depth-first augmenting paths.

    Resets any existing flow on ``network`` and leaves the maximum flow in
    place afterwards.

    Args:
        network: The network to solve; mutated in place.
        tolerance: Residual threshold; defaults to ``FLOW_CONFIG.tolerance``.

    Returns:
        MaxFlowResult: Flow value, min cut, per-edge flows and counters.

    Examples:
        >>> net = FlowNetwork.from_edges(3, [(0, 1, 4), (1, 2, 3)], 0, 2)
        >>> ford_fulkerson(net).max_flow
        3.0
    """
    return _augment_until_saturated(
        network, dfs_augmenting_path, Algorithm.FORD_FULKERSON, tolerance
    )


def edmonds_karp(
    network: FlowNetwork, *, tolerance: Optional[float] = None
) -> MaxFlowResult:
    """Compute max flow with shortest (breadth-first) augmenting paths.

    Resets any existing flow on ``network`` and leaves the maximum flow in
    place afterwards. Runs in O(V * E^2).

    Args:
        network: The network to solve; mutated in place.
        tolerance: Residual threshold; defaults to ``FLOW_CONFIG.tolerance``.

    Returns:
        MaxFlowResult: Flow value, min cut, per-edge flows and counters.
    """
    return _augment_until_saturated(
        network, bfs_augmenting_path, Algorithm.EDMONDS_KARP, tolerance
    )
