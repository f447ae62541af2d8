"""Preflow-push (push-relabel) maximum flow.

Instead of searching for whole source-to-sink paths, the algorithm floods
the network with a preflow and repairs it locally. Every vertex carries a
height label (a lower bound on its residual distance to the sink) and an
excess (inflow not yet passed on). While some non-terminal vertex has
positive excess, it either pushes excess across an admissible arc
(``height[u] == height[v] + 1``) or, when none exists, is relabelled to one
above its lowest residual neighbor.

Any order of processing active vertices is correct; the order only changes
how many pushes and relabels are needed. See ``ActiveVertexPolicy``.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence, Union

from netflow.algorithms.result import build_max_flow_result
from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.base import ActiveVertexPolicy, Algorithm, VertexID
from netflow.types.dto import MaxFlowResult

logger = get_logger(__name__)


def _select_active(
    policy: ActiveVertexPolicy, active: Deque[VertexID], height: Sequence[int]
) -> VertexID:
    if policy is ActiveVertexPolicy.FIFO:
        return active[0]
    if policy is ActiveVertexPolicy.HIGHEST_LABEL:
        return max(active, key=lambda v: (height[v], -v))
    return min(active)


def push_relabel(
    network: FlowNetwork,
    *,
    policy: Union[ActiveVertexPolicy, str, None] = None,
    tolerance: Optional[float] = None,
) -> MaxFlowResult:
    """Compute max flow with the generic push-relabel method.

    Each main-loop pass performs exactly one push or one relabel on the
    vertex chosen by ``policy``. The run ends when no vertex other than the
    terminals holds excess, at which point the preflow is a valid flow and
    the sink's excess is the max-flow value.

    Args:
        network: The network to solve; its flow is reset and then holds the
            maximum flow afterwards.
        policy: Active-vertex selection order. Defaults to
            ``FLOW_CONFIG.default_active_vertex_policy`` (lowest index first).
        tolerance: Excess or residual at or below this counts as zero.

    Returns:
        MaxFlowResult: Flow value, min cut, per-edge flows and counters
        (``pushes``, ``saturating_pushes``, ``non_saturating_pushes``,
        ``relabels``).
    """
    tolerance = FLOW_CONFIG.resolve_tolerance(tolerance)
    policy = FLOW_CONFIG.resolve_policy(policy)
    n = network.vertex_count
    source, sink = network.source, network.sink

    network.reset_flow()
    logger.debug(
        "Running %s (%s) on %r", Algorithm.PUSH_RELABEL.label, policy.name, network
    )

    height: List[int] = [0] * n
    excess: List[float] = [0.0] * n
    height[source] = n

    # Saturate every edge leaving the source
    for v in network.residual_neighbors(source, tolerance):
        amount = network.residual(source, v)
        network.add_flow(source, v, amount)
        excess[v] += amount
        excess[source] -= amount

    is_active = [
        v != source and v != sink and excess[v] > tolerance for v in range(n)
    ]
    active: Deque[VertexID] = deque(v for v in range(n) if is_active[v])

    iterations = 0
    pushes = 0
    saturating = 0
    relabels = 0
    while True:
        iterations += 1
        if not active:
            break
        u = _select_active(policy, active, height)

        for v in network.residual_neighbors(u, tolerance):
            if height[u] != height[v] + 1:
                continue
            residual = network.residual(u, v)
            amount = min(excess[u], residual)
            network.add_flow(u, v, amount)
            excess[u] -= amount
            excess[v] += amount
            pushes += 1
            if amount >= residual:
                saturating += 1
            if not is_active[v] and v != source and v != sink and excess[v] > tolerance:
                is_active[v] = True
                active.append(v)
            break
        else:
            neighbors = network.residual_neighbors(u, tolerance)
            if not neighbors:
                # Excess with no residual way out can only come from
                # rounding below tolerance; stop tracking the vertex.
                logger.warning(
                    "Vertex %d holds excess %s with no residual arcs", u, excess[u]
                )
                excess[u] = 0.0
            else:
                height[u] = 1 + min(height[v] for v in neighbors)
                relabels += 1

        if excess[u] <= tolerance:
            is_active[u] = False
            active.remove(u)

    return build_max_flow_result(
        network,
        excess[sink],
        iterations=iterations,
        algorithm=Algorithm.PUSH_RELABEL,
        stats={
            "pushes": pushes,
            "saturating_pushes": saturating,
            "non_saturating_pushes": pushes - saturating,
            "relabels": relabels,
        },
        tolerance=tolerance,
    )
