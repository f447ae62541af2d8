"""netflow: maximum-flow and minimum-cost-flow library.

netflow computes maximum flows and minimum cuts on capacitated directed
networks with several interchangeable algorithms, and min-cost maximum flows
on cost-annotated edge lists.

Primary API:
    FlowNetwork - Dense capacity/flow matrix with fixed source and sink
    ford_fulkerson(), edmonds_karp(), push_relabel(), isap() - Max-flow algorithms
    max_flow() - Run an algorithm selected by name
    compare_algorithms() - Run several algorithms on copies of one network
    min_cost_max_flow() - Successive shortest paths on an edge list
    find_min_cut(), validate_flow() - Post-hoc cut extraction and checks
    from_networkx() / to_networkx() - NetworkX conversion

Example:
    from netflow import FlowNetwork, edmonds_karp, validate_flow

    net = FlowNetwork.from_edges(4, [(0, 1, 3), (0, 2, 2), (1, 3, 2), (2, 3, 3)], 0, 3)
    result = edmonds_karp(net)
    assert result.max_flow == result.min_cut.capacity
    assert validate_flow(net).is_valid
"""

from __future__ import annotations

from netflow import logging
from netflow.algorithms.augmenting import edmonds_karp, ford_fulkerson
from netflow.algorithms.isap import isap
from netflow.algorithms.min_cost_flow import min_cost_max_flow
from netflow.algorithms.min_cut import find_min_cut
from netflow.algorithms.push_relabel import push_relabel
from netflow.algorithms.validate import validate_flow
from netflow.config import FLOW_CONFIG, FlowEngineConfig
from netflow.graph.convert import (
    NodeMap,
    cost_edges_from_networkx,
    from_networkx,
    to_networkx,
)
from netflow.graph.network import FlowNetwork
from netflow.solver.maxflow import MAX_FLOW_ALGORITHMS, compare_algorithms, max_flow
from netflow.types.base import ActiveVertexPolicy, Algorithm
from netflow.types.dto import (
    AlgorithmComparison,
    AugmentedPath,
    FlowEdge,
    FlowValidation,
    MaxFlowResult,
    MinCostFlowResult,
    MinCut,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "FlowNetwork",
    # Algorithms
    "ford_fulkerson",
    "edmonds_karp",
    "push_relabel",
    "isap",
    "min_cost_max_flow",
    "find_min_cut",
    "validate_flow",
    # Solver
    "max_flow",
    "compare_algorithms",
    "MAX_FLOW_ALGORITHMS",
    # Types
    "Algorithm",
    "ActiveVertexPolicy",
    "FlowEdge",
    "MinCut",
    "MaxFlowResult",
    "AugmentedPath",
    "MinCostFlowResult",
    "FlowValidation",
    "AlgorithmComparison",
    # Configuration
    "FlowEngineConfig",
    "FLOW_CONFIG",
    # Library integrations (NetworkX)
    "NodeMap",
    "from_networkx",
    "cost_edges_from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
