"""Shared types for netflow."""

from netflow.types.base import ActiveVertexPolicy, Algorithm, Capacity, Cost, VertexID
from netflow.types.dto import (
    AlgorithmComparison,
    AugmentedPath,
    FlowEdge,
    FlowValidation,
    MaxFlowResult,
    MinCostFlowResult,
    MinCut,
)

__all__ = [
    "ActiveVertexPolicy",
    "Algorithm",
    "AlgorithmComparison",
    "AugmentedPath",
    "Capacity",
    "Cost",
    "FlowEdge",
    "FlowValidation",
    "MaxFlowResult",
    "MinCostFlowResult",
    "MinCut",
    "VertexID",
]
