"""Configuration classes for netflow components."""

from dataclasses import dataclass
from typing import Optional, Union

from netflow.types.base import ActiveVertexPolicy, Algorithm


@dataclass
class FlowEngineConfig:
    """Defaults shared by the flow algorithms."""

    # Residual capacity or excess at or below this is treated as zero
    tolerance: float = 1e-10

    # Slack allowed by the flow validator and algorithm comparison
    validation_tolerance: float = 1e-9

    # Algorithm used by max_flow() when none is requested
    default_algorithm: str = "edmonds_karp"

    # Push-Relabel active vertex selection when none is requested
    default_active_vertex_policy: str = "lowest_index"

    def resolve_tolerance(self, tolerance: Optional[float] = None) -> float:
        """Return ``tolerance`` if given, else the configured default."""
        return self.tolerance if tolerance is None else tolerance

    def resolve_algorithm(
        self, algorithm: Union[Algorithm, str, None] = None
    ) -> Algorithm:
        """Coerce an algorithm name or member, falling back to the default."""
        if algorithm is None:
            algorithm = self.default_algorithm
        if isinstance(algorithm, Algorithm):
            return algorithm
        return Algorithm.from_string(algorithm)

    def resolve_policy(
        self, policy: Union[ActiveVertexPolicy, str, None] = None
    ) -> ActiveVertexPolicy:
        """Coerce a policy name or member, falling back to the default."""
        if policy is None:
            policy = self.default_active_vertex_policy
        if isinstance(policy, ActiveVertexPolicy):
            return policy
        return ActiveVertexPolicy.from_string(policy)


# Global configuration instance
FLOW_CONFIG = FlowEngineConfig()
