"""Assembly of the uniform max-flow result record."""

from __future__ import annotations

from typing import Dict, Optional

from netflow.algorithms.min_cut import find_min_cut
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.base import Algorithm
from netflow.types.dto import MaxFlowResult

logger = get_logger(__name__)


def build_max_flow_result(
    network: FlowNetwork,
    max_flow: float,
    *,
    iterations: int,
    algorithm: Algorithm,
    stats: Optional[Dict[str, int]] = None,
    tolerance: Optional[float] = None,
) -> MaxFlowResult:
    """Construct a ``MaxFlowResult`` from the network's final flow state.

    Min-cut extraction runs here, after the algorithm has finished, never
    inside its inner loop.
    """
    min_cut = find_min_cut(network, tolerance)
    logger.debug(
        "%s finished: max_flow=%s, iterations=%d, cut=%s",
        algorithm.label,
        max_flow,
        iterations,
        [(e.source, e.target) for e in min_cut.cut_edges],
    )
    return MaxFlowResult(
        max_flow=float(max_flow),
        min_cut=min_cut,
        flow_edges=tuple(network.to_edge_list()),
        iterations=iterations,
        algorithm_used=algorithm,
        stats=dict(stats or {}),
    )
