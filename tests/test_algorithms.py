"""Tests for the algorithm generators, the Step snapshot and the registry."""

from __future__ import annotations

import dataclasses

import pytest

from algorithms import (
    REGISTRY,
    InvalidParameters,
    algorithm_names,
    algorithms_by_tag,
    get_algorithm,
)
from algorithms.bfs import bfs
from algorithms.components import components
from algorithms.dfs import dfs
from graph import Graph


def _connected(graph, path):
    return all(graph.get_edge_between(a, b) is not None for a, b in zip(path, path[1:]))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:

    def test_names_in_order(self):
        assert algorithm_names() == ["bfs", "dfs", "components"]

    def test_lookup(self):
        assert get_algorithm("bfs").fn is bfs
        assert get_algorithm("nope") is None

    def test_every_entry_is_complete(self):
        for key, info in REGISTRY.items():
            assert info.key == key
            assert info.label and info.pseudocode and info.description
            assert info.to_dict()["key"] == key

    def test_start_requirements(self):
        assert get_algorithm("bfs").requires_start
        assert get_algorithm("dfs").requires_start
        assert not get_algorithm("components").requires_start

    def test_by_tag(self):
        assert [a.key for a in algorithms_by_tag("whole-graph")] == ["components"]


# ---------------------------------------------------------------------------
# Step snapshots
# ---------------------------------------------------------------------------

class TestStepSnapshot:

    def test_steps_are_frozen(self, triangle):
        step = next(iter(bfs(triangle, start=1)))
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.current_node = 2

    def test_every_step_covers_every_node(self, split):
        for algo in (bfs(split, start=1), dfs(split, start=4), components(split)):
            for step in algo:
                assert [nid for nid, _ in step.node_states] == [1, 2, 3, 4, 5, 6]

    def test_step_numbers_are_sequential_and_only_last_is_final(self, chain):
        steps = list(bfs(chain, start=3))
        assert [s.step_number for s in steps] == list(range(len(steps)))
        assert [s.is_final for s in steps] == [False] * (len(steps) - 1) + [True]

    def test_runs_are_deterministic(self, triangle):
        assert list(bfs(triangle, start=2)) == list(bfs(triangle, start=2))

    def test_graph_is_not_touched(self, triangle):
        before = triangle.to_dict()
        list(bfs(triangle, start=1))
        list(dfs(triangle, start=1))
        assert triangle.to_dict() == before

    def test_to_dict(self, triangle):
        data = next(iter(bfs(triangle, start=1))).to_dict()
        assert data["node_states"] == {1: "frontier", 2: "unvisited", 3: "unvisited"}
        assert data["frontier"] == [1]
        assert data["visited"] == []


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------

class TestBFS:

    def test_initial_step_has_nothing_visited(self, triangle):
        first = next(iter(bfs(triangle, start=1)))
        assert first.visited == ()
        assert first.state_of(1) == "frontier"
        assert first.state_of(2) == "unvisited"

    def test_full_traversal_on_triangle(self, triangle):
        steps = list(bfs(triangle, start=1))
        # init + (dequeue + one per incident edge + done) per node + final
        assert len(steps) == 14
        last = steps[-1]
        assert set(last.visited) == {1, 2, 3}
        assert all(state == "visited" for _, state in last.node_states)
        assert last.frontier == ()
        assert last.path == ()

    def test_hop_distances(self, chain):
        last = list(bfs(chain, start=3))[-1]
        assert [last.mark_of(n) for n in (1, 2, 3, 4, 5)] == [2, 1, 0, 1, 2]
        assert last.mark_of(99) is None

    def test_tree_and_ignored_edges(self, triangle):
        last = list(bfs(triangle, start=1))[-1]
        e12 = triangle.get_edge_between(1, 2).id
        e13 = triangle.get_edge_between(1, 3).id
        e23 = triangle.get_edge_between(2, 3).id
        assert last.edge_state_of(e12) == "tree"
        assert last.edge_state_of(e13) == "tree"
        assert last.edge_state_of(e23) == "ignored"

    def test_target_stops_with_path(self, chain):
        steps = list(bfs(chain, start=1, target=3))
        last = steps[-1]
        assert last.is_final
        assert last.path == (1, 2, 3)
        assert [last.state_of(n) for n in (1, 2, 3)] == ["path"] * 3
        assert last.state_of(5) == "unvisited"
        assert last.edge_state_of(chain.get_edge_between(2, 3).id) == "path"

    def test_unreachable_target(self, split):
        last = list(bfs(split, start=1, target=5))[-1]
        assert last.path == ()
        assert set(last.visited) == {1, 2, 3}
        assert "NOT reachable" in last.explanation

    def test_current_node_marked(self, triangle):
        steps = list(bfs(triangle, start=1))
        assert steps[1].current_node == 1
        assert steps[1].state_of(1) == "current"

    def test_missing_start(self, triangle):
        with pytest.raises(InvalidParameters):
            list(bfs(triangle))

    def test_unknown_start_or_target(self, triangle):
        with pytest.raises(InvalidParameters):
            list(bfs(triangle, start=99))
        with pytest.raises(InvalidParameters):
            list(bfs(triangle, start=1, target=99))

    def test_accepts_node_objects(self, triangle):
        steps = list(bfs(triangle, start=triangle.get_node(2)))
        assert steps[1].current_node == 2


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------

class TestDFS:

    def test_chain_order_and_depth(self, chain):
        last = list(dfs(chain, start=1))[-1]
        assert last.visited == (1, 2, 3, 4, 5)
        assert dict(last.marks) == {1: 0, 2: 1, 3: 2, 4: 3, 5: 4}

    def test_visits_only_reachable(self, split):
        last = list(dfs(split, start=4))[-1]
        assert set(last.visited) == {4, 5}
        assert last.state_of(1) == "unvisited"

    def test_target_path_is_valid(self, triangle):
        last = list(dfs(triangle, start=1, target=3))[-1]
        assert last.path[0] == 1 and last.path[-1] == 3
        assert _connected(triangle, last.path)

    def test_missing_start(self, triangle):
        with pytest.raises(InvalidParameters):
            list(dfs(triangle, start=None))


# ---------------------------------------------------------------------------
# Connected components
# ---------------------------------------------------------------------------

class TestComponents:

    def test_labels(self, split):
        steps = list(components(split))
        last = steps[-1]
        assert dict(last.marks) == {1: 0, 2: 0, 3: 0, 4: 1, 5: 1, 6: 2}
        assert "3 connected component(s)" in last.explanation
        assert steps[0].visited == ()

    def test_single_component(self, triangle):
        last = list(components(triangle))[-1]
        assert set(dict(last.marks).values()) == {0}

    def test_empty_graph_yields_nothing(self):
        assert list(components(Graph())) == []
