"""Tests for the augmenting-path algorithms (Ford-Fulkerson, Edmonds-Karp)."""

import pytest

from netflow.algorithms.augmenting import (
    augment_path,
    bfs_augmenting_path,
    dfs_augmenting_path,
    edmonds_karp,
    ford_fulkerson,
    path_bottleneck,
)
from netflow.graph.network import FlowNetwork
from netflow.types.base import Algorithm

AUGMENTING = [ford_fulkerson, edmonds_karp]


class TestPathSearch:
    def test_bfs_finds_fewest_edge_path(self, six_node_network):
        assert bfs_augmenting_path(six_node_network, 0.0) == [0, 1, 3, 5]

    def test_dfs_follows_lowest_index_first(self, six_node_network):
        # DFS commits to 0 -> 1 -> 2 before trying 1 -> 3
        assert dfs_augmenting_path(six_node_network, 0.0) == [0, 1, 2, 4, 5]

    @pytest.mark.parametrize("search", [dfs_augmenting_path, bfs_augmenting_path])
    def test_no_path_returns_empty(self, disconnected, search):
        assert search(disconnected, 0.0) == []

    def test_dfs_backtracks_out_of_dead_end(self):
        # 0 -> 1 is a dead end; the only path is 0 -> 2 -> 3
        net = FlowNetwork.from_edges(4, [(0, 1, 5), (0, 2, 1), (2, 3, 1)], 0, 3)
        assert dfs_augmenting_path(net, 0.0) == [0, 2, 3]

    def test_search_ignores_arcs_within_tolerance(self):
        net = FlowNetwork.from_edges(3, [(0, 1, 1e-12), (1, 2, 1)], 0, 2)
        assert bfs_augmenting_path(net, 0.0) == [0, 1, 2]
        assert bfs_augmenting_path(net, 1e-10) == []

    def test_bottleneck_and_augment(self, six_node_network):
        path = [0, 1, 3, 5]
        assert path_bottleneck(six_node_network, path) == 8
        augment_path(six_node_network, path, 8)
        assert six_node_network.flow[1, 3] == 8
        assert six_node_network.flow[3, 1] == -8
        assert path_bottleneck(six_node_network, path) == 0
        # Reverse walk can now cancel what was pushed
        assert path_bottleneck(six_node_network, [5, 3, 1, 0]) == 8


class TestEdmondsKarp:
    def test_six_node_network(self, six_node_network):
        result = edmonds_karp(six_node_network)

        assert result.max_flow == 16
        assert result.algorithm_used is Algorithm.EDMONDS_KARP
        assert result.stats == {"augmentations": 2}
        # Two augmentations plus the failed final search
        assert result.iterations == 3

        assert result.min_cut.source_set == (0, 1, 2, 4)
        assert result.min_cut.sink_set == (3, 5)
        assert [(e.source, e.target) for e in result.min_cut.cut_edges] == [
            (1, 3),
            (4, 5),
        ]
        assert result.min_cut.capacity == 16

    def test_flow_left_on_network(self, six_node_network):
        result = edmonds_karp(six_node_network)
        assert six_node_network.current_flow() == result.max_flow
        flows = {(e.source, e.target): e.flow for e in result.flow_edges}
        assert flows[(1, 3)] == 8
        assert flows[(4, 5)] == 8
        assert len(result.flow_edges) == six_node_network.edge_count

    def test_disconnected(self, disconnected):
        result = edmonds_karp(disconnected)
        assert result.max_flow == 0
        assert result.iterations == 1
        assert result.min_cut.source_set == (0, 1)
        assert result.min_cut.sink_set == (2,)
        assert result.min_cut.cut_edges == ()


class TestFordFulkerson:
    def test_six_node_network(self, six_node_network):
        result = ford_fulkerson(six_node_network)
        assert result.max_flow == 16
        assert result.algorithm_used is Algorithm.FORD_FULKERSON
        assert result.min_cut.capacity == 16
        assert result.iterations == result.stats["augmentations"] + 1

    def test_zigzag_cancels_middle_edge(self, zigzag):
        result = ford_fulkerson(zigzag)
        assert result.max_flow == 2000
        # Unit middle edge carries no net flow at the end
        assert zigzag.flow[1, 2] == 0


@pytest.mark.parametrize("solve", AUGMENTING)
def test_known_networks(solve, all_networks):
    for network, expected in all_networks:
        result = solve(network)
        assert result.max_flow == pytest.approx(expected)
        assert result.min_cut.capacity == pytest.approx(expected)


@pytest.mark.parametrize("solve", AUGMENTING)
def test_rerun_resets_previous_flow(solve, clrs):
    first = solve(clrs)
    clrs.add_flow(0, 1, 3)
    second = solve(clrs)
    assert first.max_flow == second.max_flow == 23
    assert clrs.current_flow() == 23


@pytest.mark.parametrize("solve", AUGMENTING)
def test_fractional_capacities(solve, fractional):
    result = solve(fractional)
    assert result.max_flow == pytest.approx(0.75)
