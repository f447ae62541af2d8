"""Post-hoc validation of a flow against its network.

The checks are independent of the algorithm that produced the flow. Problems
are reported and logged, never raised: a violation means an algorithm bug,
not bad caller input.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.dto import FlowValidation

logger = get_logger(__name__)


def validate_flow(
    network: FlowNetwork, tolerance: Optional[float] = None
) -> FlowValidation:
    """Check capacity bounds, antisymmetry and conservation.

    Args:
        network: Network holding a flow.
        tolerance: Numeric slack for every comparison. Defaults to
            ``FLOW_CONFIG.validation_tolerance``.

    Returns:
        FlowValidation: ``is_valid`` plus one message per violated constraint.
    """
    if tolerance is None:
        tolerance = FLOW_CONFIG.validation_tolerance

    capacity = network.capacity
    flow = network.flow
    errors: List[str] = []

    # Capacity bounds: no ordered pair may carry more than its capacity,
    # which also bounds negative flow by the partner edge's capacity.
    for u, v in np.argwhere(flow - capacity > tolerance):
        errors.append(
            f"Capacity violated on edge ({u}, {v}): "
            f"flow {flow[u, v]} > capacity {capacity[u, v]}"
        )

    skew = np.abs(flow + flow.T)
    for u, v in np.argwhere(np.triu(skew > tolerance)):
        errors.append(
            f"Antisymmetry violated on pair ({u}, {v}): "
            f"flow {flow[u, v]} vs reverse {flow[v, u]}"
        )

    inflow = np.where(flow > 0, flow, 0.0).sum(axis=0)
    outflow = np.where(flow > 0, flow, 0.0).sum(axis=1)
    for v in range(network.vertex_count):
        if v in (network.source, network.sink):
            continue
        if abs(inflow[v] - outflow[v]) > tolerance:
            errors.append(
                f"Conservation violated at vertex {v}: "
                f"inflow {inflow[v]} != outflow {outflow[v]}"
            )

    for message in errors:
        logger.warning(message)

    return FlowValidation(is_valid=not errors, errors=tuple(errors))
