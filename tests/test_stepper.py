"""Tests for the stepping engine: warm-up, navigation, run mode, selection."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from algorithms import (
    AlgoInfo,
    AlgorithmError,
    CannotStep,
    EmptyGraph,
    InvalidParameters,
    NoSteps,
)
from algorithms.bfs import bfs
from algorithms.step import StepBuilder
from engine import (
    AutoRunner,
    EngineState,
    Selection,
    SnapshotStore,
    Stepper,
    warm_up,
    warm_up_async,
)
from graph import Graph


def _silent(graph):
    return iter(())


def _explodes(graph):
    yield StepBuilder(graph.node_ids()).build()
    raise RuntimeError("boom")


SILENT = AlgoInfo(key="silent", label="Silent", fn=_silent, pseudocode=[], requires_start=False)
EXPLODES = AlgoInfo(key="explodes", label="Explodes", fn=_explodes, pseudocode=[], requires_start=False)


def _assert_empty(stepper: Stepper):
    assert stepper.state == EngineState.EMPTY
    assert not stepper.can_step_forward()
    assert not stepper.can_step_backward()
    assert stepper.current_step is None
    assert stepper.cursor == -1
    assert stepper.total_steps == 0


# ---------------------------------------------------------------------------
# Empty engine
# ---------------------------------------------------------------------------

class TestEmptyStepper:

    def test_starts_empty(self):
        _assert_empty(Stepper())

    def test_stepping_empty_raises(self):
        stepper = Stepper()
        with pytest.raises(CannotStep):
            stepper.step_forward()
        with pytest.raises(CannotStep):
            stepper.step_backward()


# ---------------------------------------------------------------------------
# Warm-up
# ---------------------------------------------------------------------------

class TestWarmUp:

    def test_ready_at_step_zero(self, triangle):
        stepper = Stepper().warm_up(triangle, "bfs", start=1)
        assert stepper.state == EngineState.READY
        assert stepper.is_ready
        assert stepper.cursor == 0
        assert stepper.current_step == stepper.store.first
        assert stepper.current_step.visited == ()
        assert not stepper.can_step_backward()
        assert stepper.can_step_forward()
        assert stepper.algorithm.key == "bfs"

    def test_missing_start_leaves_engine_empty(self, triangle):
        stepper = Stepper()
        with pytest.raises(InvalidParameters):
            stepper.warm_up(triangle, "bfs")
        _assert_empty(stepper)

    def test_failure_discards_previous_run(self, triangle):
        stepper = Stepper().warm_up(triangle, "bfs", start=1)
        stepper.step_forward()
        with pytest.raises(InvalidParameters):
            stepper.warm_up(triangle, "dfs", start=42)
        _assert_empty(stepper)

    def test_unknown_algorithm(self, triangle):
        with pytest.raises(InvalidParameters):
            Stepper().warm_up(triangle, "quicksort")

    def test_unexpected_parameter(self, triangle):
        stepper = Stepper()
        with pytest.raises(InvalidParameters):
            stepper.warm_up(triangle, "components", start=1)
        _assert_empty(stepper)

    def test_empty_graph(self):
        stepper = Stepper()
        with pytest.raises(EmptyGraph):
            stepper.warm_up(Graph(), "components")
        _assert_empty(stepper)

    def test_empty_graph_is_a_no_steps_error(self):
        with pytest.raises(NoSteps):
            warm_up(Graph(), "components")

    def test_no_steps_on_populated_graph(self, triangle):
        stepper = Stepper()
        with pytest.raises(NoSteps) as info:
            stepper.warm_up(triangle, SILENT)
        assert not isinstance(info.value, EmptyGraph)
        _assert_empty(stepper)

    def test_algorithm_failure_is_wrapped(self, triangle):
        stepper = Stepper()
        with pytest.raises(AlgorithmError) as info:
            stepper.warm_up(triangle, EXPLODES)
        assert isinstance(info.value.__cause__, RuntimeError)
        assert info.value.algo_key == "explodes"
        assert "boom" in str(info.value)
        _assert_empty(stepper)

    def test_on_step_callback(self, triangle):
        seen = []
        stepper = Stepper(on_step=seen.append)
        stepper.warm_up(triangle, "bfs", start=1)
        stepper.step_forward()
        stepper.step_backward()
        assert [s.step_number for s in seen] == [0, 1, 0]

    def test_failing_on_step_leaves_engine_empty(self, triangle):
        def boom(step):
            raise RuntimeError("hook")

        stepper = Stepper(on_step=boom)
        with pytest.raises(RuntimeError, match="hook"):
            stepper.warm_up(triangle, "bfs", start=1)
        _assert_empty(stepper)

    @pytest.mark.parametrize("start", [[1], {1}, True, "1"])
    def test_start_of_the_wrong_type(self, triangle, start):
        stepper = Stepper()
        with pytest.raises(InvalidParameters):
            stepper.warm_up(triangle, "bfs", start=start)
        _assert_empty(stepper)

    def test_module_level_warm_up(self, chain):
        stepper = warm_up(chain, "dfs", start=1, target=5)
        assert stepper.total_steps > 1
        assert stepper.store.last.path == (1, 2, 3, 4, 5)


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

class TestNavigation:

    def test_forward_visits_every_step_in_order(self, triangle):
        expected = list(bfs(triangle, start=1))
        stepper = warm_up(triangle, "bfs", start=1)
        seen = [stepper.current_step]
        while stepper.can_step_forward():
            seen.append(stepper.step_forward())
        assert seen == expected
        assert seen[-1].is_final

    def test_forward_count_is_length_minus_one(self, chain):
        stepper = warm_up(chain, "bfs", start=1)
        for _ in range(stepper.total_steps - 1):
            assert stepper.can_step_forward()
            stepper.step_forward()
        assert not stepper.can_step_forward()
        assert stepper.cursor == stepper.total_steps - 1

    def test_forward_then_backward_restores(self, chain):
        stepper = warm_up(chain, "dfs", start=3)
        for _ in range(3):
            stepper.step_forward()
        before = stepper.current_step
        stepper.step_forward()
        assert stepper.step_backward() == before
        assert stepper.current_step is before

    def test_revisiting_returns_identical_step(self, triangle):
        stepper = warm_up(triangle, "bfs", start=1)
        first_pass = stepper.step_forward()
        stepper.step_backward()
        assert stepper.step_forward() is first_pass

    def test_step_past_end_raises_and_keeps_cursor(self, triangle):
        stepper = warm_up(triangle, "components")
        while stepper.can_step_forward():
            stepper.step_forward()
        end = stepper.cursor
        with pytest.raises(CannotStep):
            stepper.step_forward()
        assert stepper.cursor == end

    def test_step_before_start_raises(self, triangle):
        stepper = warm_up(triangle, "bfs", start=1)
        with pytest.raises(CannotStep):
            stepper.step_backward()
        assert stepper.cursor == 0

    def test_reset(self, triangle):
        stepper = warm_up(triangle, "bfs", start=1)
        stepper.reset()
        _assert_empty(stepper)


# ---------------------------------------------------------------------------
# Background warm-up
# ---------------------------------------------------------------------------

class TestWarmUpAsync:

    def test_resolves_to_ready_stepper(self, triangle):
        stepper = warm_up_async(triangle, "bfs", start=1).result(timeout=10)
        assert stepper.is_ready
        assert stepper.current_step.step_number == 0

    def test_runs_on_a_copy(self, chain):
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = warm_up_async(chain, "bfs", executor=pool, start=1)
            chain.remove_node(5)
            stepper = future.result(timeout=10)
        assert 5 in stepper.store.last.visited

    def test_errors_come_through_the_future(self, triangle):
        future = warm_up_async(triangle, "bfs")
        with pytest.raises(InvalidParameters):
            future.result(timeout=10)


# ---------------------------------------------------------------------------
# Snapshot store
# ---------------------------------------------------------------------------

class TestSnapshotStore:

    def test_sequence_behaviour(self, triangle):
        steps = list(bfs(triangle, start=1))
        store = SnapshotStore(steps)
        assert len(store) == len(steps)
        assert store[3] == steps[3]
        assert list(store) == steps
        assert store.first == steps[0] and store.last == steps[-1]
        assert not SnapshotStore([])


# ---------------------------------------------------------------------------
# Run mode
# ---------------------------------------------------------------------------

class TestAutoRunner:

    def test_runs_to_the_end_and_stops(self, triangle):
        stepper = warm_up(triangle, "bfs", start=1)
        runner = AutoRunner(stepper)
        assert runner.start()
        ticks = 0
        while runner.is_running:
            assert runner.tick() is not None
            ticks += 1
        assert ticks == stepper.total_steps - 1
        assert stepper.current_step.is_final
        assert runner.tick() is None

    def test_stop_ceases_stepping(self, chain):
        stepper = warm_up(chain, "bfs", start=1)
        runner = AutoRunner(stepper)
        runner.start()
        runner.tick()
        runner.stop()
        assert runner.tick() is None
        assert stepper.cursor == 1

    def test_toggle(self, chain):
        runner = AutoRunner(warm_up(chain, "bfs", start=1))
        assert runner.toggle() is True
        assert runner.toggle() is False

    def test_nothing_to_play(self, triangle):
        assert AutoRunner(Stepper()).start() is False
        stepper = warm_up(triangle, "bfs", start=1)
        while stepper.can_step_forward():
            stepper.step_forward()
        assert AutoRunner(stepper).start() is False

    def test_speed(self):
        runner = AutoRunner(Stepper())
        assert runner.interval == 0.2
        runner.set_speed("slow")
        assert runner.interval == 1.0
        runner.set_speed("warp")
        assert runner.interval == 0.2
        runner.set_speed_value(0.0)
        assert runner.interval == 0.02


# ---------------------------------------------------------------------------
# Endpoint selection
# ---------------------------------------------------------------------------

class TestSelection:

    def test_cycle(self):
        sel = Selection()
        sel.select(1)
        assert (sel.start, sel.end) == (1, None)
        sel.select(2)
        assert (sel.start, sel.end) == (1, 2)
        assert sel.is_complete
        sel.select(3)
        assert (sel.start, sel.end) == (3, None)
        assert not sel.is_complete

    def test_discard(self):
        sel = Selection()
        sel.select(1)
        sel.select(2)
        sel.discard(1)
        assert (sel.start, sel.end) == (2, None)
        sel.discard(2)
        assert (sel.start, sel.end) == (None, None)

    def test_clear(self):
        sel = Selection()
        sel.select(4)
        sel.clear()
        assert sel.to_dict() == {"start": None, "end": None}
