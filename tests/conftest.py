"""Shared fixtures: small flow networks with known maximum flows."""

from __future__ import annotations

import pytest

from netflow.graph.network import FlowNetwork
from netflow.logging import reset_logging, setup_root_logger


@pytest.fixture(autouse=True)
def _fresh_logging():
    """Restore the default netflow logging setup around every test."""
    reset_logging()
    setup_root_logger()
    yield
    reset_logging()
    setup_root_logger()


@pytest.fixture
def six_node_network() -> FlowNetwork:
    # Capacity:
    #        [10]      [8]       [10]
    #   0 ───────► 1 ───────► 3 ───────► 5
    #   │          │[5]       │[5]       ▲
    #   │[8]       ▼          ▼          │[8]
    #   └────────► 2 ───────► 4 ─────────┘
    #                  [10]
    #
    # Max flow 16, min cut {(1,3), (4,5)}.
    return FlowNetwork.from_edges(
        6,
        [
            (0, 1, 10),
            (0, 2, 8),
            (1, 2, 5),
            (1, 3, 8),
            (2, 4, 10),
            (3, 4, 5),
            (3, 5, 10),
            (4, 5, 8),
        ],
        source=0,
        sink=5,
    )


@pytest.fixture
def disconnected() -> FlowNetwork:
    # 0 ──[5]──► 1        2 (sink, unreachable)
    return FlowNetwork.from_edges(3, [(0, 1, 5)], source=0, sink=2)


@pytest.fixture
def diamond() -> FlowNetwork:
    # Capacity:
    #        [3]       [2]
    #   0 ───────► 1 ───────► 3
    #   │          │[1]       ▲
    #   │[2]       ▼          │[3]
    #   └────────► 2 ─────────┘
    #
    # Max flow 5, min cut is everything leaving 0.
    return FlowNetwork.from_edges(
        4,
        [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)],
        source=0,
        sink=3,
    )


@pytest.fixture
def clrs() -> FlowNetwork:
    """Textbook network (CLRS figure 26.1) with max flow 23."""
    return FlowNetwork.from_edges(
        6,
        [
            (0, 1, 16),
            (0, 2, 13),
            (1, 2, 10),
            (2, 1, 4),
            (1, 3, 12),
            (3, 2, 9),
            (2, 4, 14),
            (4, 3, 7),
            (3, 5, 20),
            (4, 5, 4),
        ],
        source=0,
        sink=5,
    )


@pytest.fixture
def zigzag() -> FlowNetwork:
    """Network where a naive DFS first crosses the unit-capacity middle edge.

    Max flow 2000 regardless of augmentation order.
    """
    return FlowNetwork.from_edges(
        4,
        [(0, 1, 1000), (0, 2, 1000), (1, 2, 1), (1, 3, 1000), (2, 3, 1000)],
        source=0,
        sink=3,
    )


@pytest.fixture
def antiparallel() -> FlowNetwork:
    # Edges in both directions between 0-1 and 1-2; max flow 0 -> 2 is 4.
    return FlowNetwork.from_edges(
        3,
        [(0, 1, 4), (1, 0, 2), (1, 2, 3), (2, 1, 1), (0, 2, 1)],
        source=0,
        sink=2,
    )


@pytest.fixture
def fractional() -> FlowNetwork:
    """Non-integer capacities; max flow 0.75."""
    return FlowNetwork.from_edges(
        4,
        [(0, 1, 0.5), (0, 2, 0.25), (1, 3, 0.625), (2, 3, 0.125), (2, 1, 0.25)],
        source=0,
        sink=3,
    )


@pytest.fixture
def all_networks(six_node_network, disconnected, diamond, clrs, zigzag, antiparallel, fractional):
    """Every sample network paired with its known max flow."""
    return [
        (six_node_network, 16),
        (disconnected, 0),
        (diamond, 5),
        (clrs, 23),
        (zigzag, 2000),
        (antiparallel, 4),
        (fractional, 0.75),
    ]
