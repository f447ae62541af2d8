"""Tests for push-relabel max flow and its active-vertex policies."""

import logging

import pytest

from netflow.algorithms.push_relabel import _select_active, push_relabel
from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.types.base import ActiveVertexPolicy, Algorithm

POLICIES = list(ActiveVertexPolicy)


def test_chain_counts():
    # 0 -[3]-> 1 -[2]-> 2: one unit of excess has to return to the source
    net = FlowNetwork.from_edges(3, [(0, 1, 3), (1, 2, 2)], 0, 2)
    result = push_relabel(net)

    assert result.max_flow == 2
    assert result.algorithm_used is Algorithm.PUSH_RELABEL
    assert result.stats == {
        "pushes": 2,
        "saturating_pushes": 1,
        "non_saturating_pushes": 1,
        "relabels": 2,
    }
    assert result.iterations == 5
    assert net.flow[0, 1] == 2
    assert net.flow[1, 2] == 2


def test_disconnected_returns_excess_to_source(disconnected):
    result = push_relabel(disconnected)
    assert result.max_flow == 0
    assert disconnected.flow[0, 1] == 0
    assert result.stats["relabels"] == 1
    assert result.stats["pushes"] == 1
    assert result.min_cut.sink_set == (2,)


def test_six_node_network(six_node_network):
    result = push_relabel(six_node_network)
    assert result.max_flow == 16
    assert result.min_cut.source_set == (0, 1, 2, 4)
    assert result.min_cut.capacity == 16
    assert result.iterations == (
        result.stats["pushes"] + result.stats["relabels"] + 1
    )


@pytest.mark.parametrize("policy", POLICIES)
def test_policies_agree_on_known_networks(policy, all_networks):
    for network, expected in all_networks:
        result = push_relabel(network, policy=policy)
        assert result.max_flow == pytest.approx(expected)
        assert network.current_flow() == pytest.approx(expected)


@pytest.mark.parametrize("name", ["fifo", "highest-label", "LOWEST_INDEX"])
def test_policy_by_name(name, clrs):
    assert push_relabel(clrs, policy=name).max_flow == 23


def test_invalid_policy_name(clrs):
    with pytest.raises(ValueError, match="Invalid ActiveVertexPolicy"):
        push_relabel(clrs, policy="random")


def test_default_policy_comes_from_config(clrs, monkeypatch):
    monkeypatch.setattr(FLOW_CONFIG, "default_active_vertex_policy", "fifo")
    fifo = push_relabel(clrs)
    explicit = push_relabel(clrs, policy=ActiveVertexPolicy.FIFO)
    assert fifo.stats == explicit.stats
    assert fifo.iterations == explicit.iterations


def test_select_active():
    height = [6, 2, 5, 5, 1, 0]
    active = [4, 3, 2, 1]
    assert _select_active(ActiveVertexPolicy.LOWEST_INDEX, active, height) == 1
    assert _select_active(ActiveVertexPolicy.FIFO, active, height) == 4
    # Ties on height resolve to the lower index
    assert _select_active(ActiveVertexPolicy.HIGHEST_LABEL, active, height) == 2


def test_debug_log_names_policy(caplog, diamond):
    caplog.set_level(logging.DEBUG, logger="netflow")
    push_relabel(diamond, policy="highest_label")
    assert "Push-Relabel (HIGHEST_LABEL)" in caplog.text
