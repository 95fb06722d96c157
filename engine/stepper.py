"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object that decides which Step is on screen.
It warms up by running the chosen algorithm to completion, freezes the
result in a SnapshotStore, and then moves a cursor over it.

State machine:
    EMPTY  →  warm_up() ok      →  READY (cursor 0)
    READY  →  step_forward()    →  READY (cursor + 1)
    READY  →  step_backward()   →  READY (cursor - 1)
    any    →  warm_up() fails   →  EMPTY
    any    →  reset()           →  EMPTY

Because the whole run is precomputed, stepping backward never needs the
algorithm to be reversible, and step k is always the same Step object.

Thread safety:
  This class is NOT thread-safe.  All calls must come from one thread;
  warm_up_async() does its work on a private copy of the graph and only
  hands back a finished Stepper, so nothing half-built is ever visible.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Optional, Union

from graph import Graph
from algorithms import AlgoInfo, get_algorithm
from algorithms.errors import (
    AlgorithmError,
    CannotStep,
    EmptyGraph,
    GraphStepError,
    InvalidParameters,
    NoSteps,
)
from algorithms.step import Step
from engine.store import SnapshotStore

logger = logging.getLogger(__name__)

AlgorithmRef = Union[str, AlgoInfo]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class EngineState(Enum):
    EMPTY = "empty"
    READY = "ready"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state    : Current EngineState.
        on_step  : Optional callback(Step) fired every time the current step
                   changes.  The front-end hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self._store:   Optional[SnapshotStore] = None
        self._cursor:  int                     = -1
        self._algo:    Optional[AlgoInfo]      = None
        self.state:    EngineState             = EngineState.EMPTY
        self.on_step:  Optional[Callable[[Step], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def warm_up(self, graph: Graph, algorithm: AlgorithmRef, **params: Any) -> "Stepper":
        """
        Run `algorithm` over `graph` to completion and show step 0.

        Raises InvalidParameters, NoSteps / EmptyGraph or AlgorithmError,
        or whatever the on_step callback raises for step 0.  On any failure
        the engine is left EMPTY.
        """
        try:
            info = _lookup(algorithm)
            store = _run_to_completion(info, graph, params)
        except GraphStepError as exc:
            self.reset()
            logger.warning("warm-up of %r failed: %s", getattr(algorithm, "key", algorithm), exc)
            raise

        self._store  = store
        self._algo   = info
        self._cursor = 0
        self.state   = EngineState.READY
        try:
            self._notify()
        except Exception:
            # a failing on_step hook fails the whole warm-up
            self.reset()
            raise
        logger.info("warm-up of %s done: %d step(s)", info.key, len(store))
        return self

    def reset(self) -> None:
        """Back to EMPTY — caller must warm up again."""
        self._store  = None
        self._algo   = None
        self._cursor = -1
        self.state   = EngineState.EMPTY

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def can_step_forward(self) -> bool:
        return self._store is not None and self._cursor < len(self._store) - 1

    def can_step_backward(self) -> bool:
        return self._store is not None and self._cursor > 0

    def step_forward(self) -> Step:
        """Advance one step.  CannotStep if already on the last one."""
        if not self.can_step_forward():
            raise CannotStep(f"Cannot step forward from step {self._cursor}")
        self._cursor += 1
        logger.debug("step forward → %d", self._cursor)
        return self._notify()

    def step_backward(self) -> Step:
        """Rewind one step.  CannotStep if already on the first one."""
        if not self.can_step_backward():
            raise CannotStep(f"Cannot step backward from step {self._cursor}")
        self._cursor -= 1
        logger.debug("step backward → %d", self._cursor)
        return self._notify()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_step(self) -> Optional[Step]:
        if self._store is None:
            return None
        return self._store[self._cursor]

    @property
    def total_steps(self) -> int:
        return len(self._store) if self._store is not None else 0

    @property
    def store(self) -> Optional[SnapshotStore]:
        return self._store

    @property
    def algorithm(self) -> Optional[AlgoInfo]:
        return self._algo

    @property
    def is_ready(self) -> bool:
        return self.state == EngineState.READY

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self) -> Step:
        step = self._store[self._cursor]
        if self.on_step:
            self.on_step(step)
        return step


# ---------------------------------------------------------------------------
# Warm-up helpers
# ---------------------------------------------------------------------------
_background: Optional[ThreadPoolExecutor] = None


def warm_up(graph: Graph, algorithm: AlgorithmRef, **params: Any) -> Stepper:
    """Build a fresh Stepper and warm it up.  Errors propagate."""
    return Stepper().warm_up(graph, algorithm, **params)


def warm_up_async(
    graph: Graph,
    algorithm: AlgorithmRef,
    executor: Optional[Executor] = None,
    **params: Any,
) -> "Future[Stepper]":
    """
    Warm up on a background thread.

    The algorithm runs against a copy of `graph` taken now, so the caller
    may keep editing.  The future resolves to a READY Stepper or raises
    the warm-up error.
    """
    global _background
    if executor is None:
        if _background is None:
            _background = ThreadPoolExecutor(max_workers=1, thread_name_prefix="warm-up")
        executor = _background
    return executor.submit(warm_up, graph.copy(), algorithm, **params)


def _lookup(algorithm: AlgorithmRef) -> AlgoInfo:
    if isinstance(algorithm, AlgoInfo):
        return algorithm
    info = get_algorithm(algorithm) if algorithm else None
    if info is None:
        raise InvalidParameters(f"Unknown algorithm: {algorithm!r}")
    return info


def _run_to_completion(info: AlgoInfo, graph: Graph, params: dict) -> SnapshotStore:
    try:
        gen = info.fn(graph, **params)
    except TypeError as exc:
        raise InvalidParameters(f"{info.label}: {exc}") from exc

    try:
        steps = list(gen)
    except GraphStepError:
        raise
    except Exception as exc:
        raise AlgorithmError(info.key, exc) from exc

    if not steps:
        if graph.node_count() == 0:
            raise EmptyGraph(f"{info.label}: the graph has no nodes.")
        raise NoSteps(f"{info.label} produced no steps.")
    return SnapshotStore(steps)
