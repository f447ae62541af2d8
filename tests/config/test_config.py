"""Tests for `netflow.config` focusing on behavior and correctness."""

import pytest

from netflow.config import FLOW_CONFIG, FlowEngineConfig
from netflow.types.base import ActiveVertexPolicy, Algorithm


def test_defaults() -> None:
    """Default config matches the documented tolerances and selections."""
    config = FlowEngineConfig()
    assert config.tolerance == 1e-10
    assert config.validation_tolerance == 1e-9
    assert config.resolve_algorithm() is Algorithm.EDMONDS_KARP
    assert config.resolve_policy() is ActiveVertexPolicy.LOWEST_INDEX


def test_global_instance_uses_defaults() -> None:
    assert FLOW_CONFIG == FlowEngineConfig()


def test_resolve_tolerance() -> None:
    config = FlowEngineConfig(tolerance=1e-6)
    assert config.resolve_tolerance() == 1e-6
    assert config.resolve_tolerance(0.5) == 0.5
    # Explicit zero is honored, not replaced by the default
    assert config.resolve_tolerance(0.0) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("isap", Algorithm.ISAP),
        ("Push-Relabel", Algorithm.PUSH_RELABEL),
        ("  ford fulkerson ", Algorithm.FORD_FULKERSON),
        (Algorithm.EDMONDS_KARP, Algorithm.EDMONDS_KARP),
    ],
)
def test_resolve_algorithm(value, expected) -> None:
    assert FlowEngineConfig().resolve_algorithm(value) is expected


def test_resolve_algorithm_custom_default() -> None:
    config = FlowEngineConfig(default_algorithm="push_relabel")
    assert config.resolve_algorithm(None) is Algorithm.PUSH_RELABEL


def test_resolve_algorithm_invalid() -> None:
    with pytest.raises(ValueError, match="Valid values are: FORD_FULKERSON"):
        FlowEngineConfig().resolve_algorithm("simplex")


def test_invalid_default_fails_on_use() -> None:
    config = FlowEngineConfig(default_active_vertex_policy="random")
    with pytest.raises(ValueError, match="Invalid ActiveVertexPolicy 'random'"):
        config.resolve_policy()


@pytest.mark.parametrize(
    "value, expected",
    [
        ("fifo", ActiveVertexPolicy.FIFO),
        ("highest-label", ActiveVertexPolicy.HIGHEST_LABEL),
        (ActiveVertexPolicy.LOWEST_INDEX, ActiveVertexPolicy.LOWEST_INDEX),
    ],
)
def test_resolve_policy(value, expected) -> None:
    assert FlowEngineConfig().resolve_policy(value) is expected


def test_algorithm_labels() -> None:
    assert Algorithm.FORD_FULKERSON.label == "Ford-Fulkerson (DFS)"
    assert Algorithm.EDMONDS_KARP.label == "Edmonds-Karp (BFS)"
    assert Algorithm.PUSH_RELABEL.label == "Push-Relabel"
    assert Algorithm.ISAP.label == "ISAP"
