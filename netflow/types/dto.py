"""Types and data structures for algorithm results.

Defines immutable result containers returned by the max-flow and
min-cost-flow entry points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from netflow.types.base import Algorithm, Capacity, Cost, VertexID


@dataclass(frozen=True)
class FlowEdge:
    """A real (positive-capacity) edge together with the flow it carries.

    Attributes:
        source: Tail vertex.
        target: Head vertex.
        capacity: Original edge capacity.
        flow: Flow on the edge after the run.
        cost: Per-unit cost; only set by the cost-aware engine.
    """

    source: VertexID
    target: VertexID
    capacity: Capacity
    flow: Capacity
    cost: Optional[Cost] = None

    @property
    def residual(self) -> Capacity:
        """Remaining forward capacity."""
        return self.capacity - self.flow


@dataclass(frozen=True)
class MinCut:
    """An s-t cut derived from residual reachability.

    Attributes:
        source_set: Vertices reachable from the source in the residual graph.
        sink_set: All remaining vertices.
        cut_edges: Real edges crossing from ``source_set`` to ``sink_set``.
    """

    source_set: Tuple[VertexID, ...]
    sink_set: Tuple[VertexID, ...]
    cut_edges: Tuple[FlowEdge, ...]

    @property
    def capacity(self) -> Capacity:
        """Sum of capacities of the cut edges."""
        return sum(edge.capacity for edge in self.cut_edges)


@dataclass(frozen=True)
class MaxFlowResult:
    """Result of a max-flow computation.

    Attributes:
        max_flow: Maximum flow value achieved.
        min_cut: Minimum cut extracted from the final residual graph.
        flow_edges: Every real edge with its final flow.
        iterations: Main-loop passes performed by the algorithm.
        algorithm_used: Which algorithm produced the result.
        stats: Algorithm-specific counters (pushes, relabels, augmentations...).
    """

    max_flow: Capacity
    min_cut: MinCut
    flow_edges: Tuple[FlowEdge, ...]
    iterations: int
    algorithm_used: Algorithm
    stats: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AugmentedPath:
    """One augmentation performed by the min-cost engine.

    Attributes:
        path: Vertices from source to sink.
        flow: Units pushed along the path.
        cost: Per-unit cost of the path at the time it was augmented.
    """

    path: Tuple[VertexID, ...]
    flow: Capacity
    cost: Cost


@dataclass(frozen=True)
class MinCostFlowResult:
    """Result of a min-cost max-flow computation.

    Attributes:
        max_flow: Maximum flow value achieved.
        min_cost: Total cost of that flow.
        flow_edges: Every positive-capacity input edge, in input order.
        paths: Augmentations in the order they were performed.
    """

    max_flow: Capacity
    min_cost: Cost
    flow_edges: Tuple[FlowEdge, ...]
    paths: Tuple[AugmentedPath, ...]


@dataclass(frozen=True)
class FlowValidation:
    """Outcome of checking a flow against its network's invariants."""

    is_valid: bool
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AlgorithmComparison:
    """Results of running several algorithms on copies of one network.

    Attributes:
        results: Result per algorithm.
        timings: Wall-clock seconds per algorithm.
        consistent: True when every algorithm reported the same max flow.
    """

    results: Dict[Algorithm, MaxFlowResult]
    timings: Dict[Algorithm, float]
    consistent: bool
