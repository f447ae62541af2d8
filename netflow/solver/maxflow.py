"""Algorithm selection and side-by-side comparison for max-flow runs.

Every algorithm is a plain function ``FlowNetwork -> MaxFlowResult``; this
module maps ``Algorithm`` members to those functions so callers can pick one
by name, and runs several of them on independent copies of a network to
compare results and timings.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional, Union

from netflow.algorithms.augmenting import edmonds_karp, ford_fulkerson
from netflow.algorithms.isap import isap
from netflow.algorithms.push_relabel import push_relabel
from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.base import Algorithm
from netflow.types.dto import AlgorithmComparison, MaxFlowResult

logger = get_logger(__name__)

MaxFlowFunc = Callable[..., MaxFlowResult]

MAX_FLOW_ALGORITHMS: Dict[Algorithm, MaxFlowFunc] = {
    Algorithm.FORD_FULKERSON: ford_fulkerson,
    Algorithm.EDMONDS_KARP: edmonds_karp,
    Algorithm.PUSH_RELABEL: push_relabel,
    Algorithm.ISAP: isap,
}


def max_flow(
    network: FlowNetwork,
    algorithm: Union[Algorithm, str, None] = None,
    *,
    copy_network: bool = False,
    **kwargs,
) -> MaxFlowResult:
    """Run one max-flow algorithm on ``network``.

    Args:
        network: The network to solve.
        algorithm: ``Algorithm`` member or case-insensitive name such as
            ``"push_relabel"``. Defaults to ``FLOW_CONFIG.default_algorithm``.
        copy_network: If True, solve a copy and leave ``network`` untouched.
        **kwargs: Forwarded to the algorithm (e.g. ``tolerance``, ``policy``).

    Returns:
        MaxFlowResult: The algorithm's result.

    Raises:
        ValueError: If ``algorithm`` names no known algorithm.
    """
    chosen = FLOW_CONFIG.resolve_algorithm(algorithm)
    target = network.copy() if copy_network else network
    return MAX_FLOW_ALGORITHMS[chosen](target, **kwargs)


def compare_algorithms(
    network: FlowNetwork,
    algorithms: Optional[Iterable[Union[Algorithm, str]]] = None,
    *,
    tolerance: Optional[float] = None,
) -> AlgorithmComparison:
    """Run several algorithms on independent copies of ``network``.

    ``network`` itself is never mutated.

    Args:
        network: The network to solve.
        algorithms: Algorithms to run, in order. Defaults to all of them.
        tolerance: Maximum spread of reported flow values still considered
            consistent. Defaults to ``FLOW_CONFIG.validation_tolerance``.

    Returns:
        AlgorithmComparison: Per-algorithm results and wall-clock timings,
        plus whether every algorithm agreed on the flow value.
    """
    if tolerance is None:
        tolerance = FLOW_CONFIG.validation_tolerance
    chosen = [
        FLOW_CONFIG.resolve_algorithm(a)
        for a in (algorithms if algorithms is not None else MAX_FLOW_ALGORITHMS)
    ]

    results: Dict[Algorithm, MaxFlowResult] = {}
    timings: Dict[Algorithm, float] = {}
    for algorithm in chosen:
        start = time.perf_counter()
        result = MAX_FLOW_ALGORITHMS[algorithm](network.copy())
        timings[algorithm] = time.perf_counter() - start
        results[algorithm] = result
        logger.info(
            "%s: max_flow=%s, iterations=%d, time=%.2fms",
            algorithm.label,
            result.max_flow,
            result.iterations,
            timings[algorithm] * 1000,
        )

    values = [r.max_flow for r in results.values()]
    consistent = not values or max(values) - min(values) <= tolerance
    if not consistent:
        logger.warning(
            "Max-flow algorithms disagree: %s",
            {a.name: r.max_flow for a, r in results.items()},
        )

    return AlgorithmComparison(results=results, timings=timings, consistent=consistent)
