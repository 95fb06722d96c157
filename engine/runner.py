"""
runner.py — Run Mode
=====================
Automatic playback on top of a Stepper.  The Stepper itself knows nothing
about time: whoever owns the clock (a front-end timer, a polling client,
a test) calls tick() at `interval`, and the runner turns that into
step_forward() calls until the run is exhausted, then stops by itself.

    runner = AutoRunner(stepper)
    runner.start()
    while runner.is_running:
        runner.tick()
        sleep(runner.interval)
"""

import logging
from typing import Optional

from algorithms.step import Step
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
DEFAULT_TICK_INTERVAL = 0.2

SPEED_PRESETS = {
    "slow":   1.0,
    "medium": DEFAULT_TICK_INTERVAL,
    "fast":   0.05,
}


class AutoRunner:
    """
    Attributes:
        stepper  : The Stepper being driven.
        interval : Seconds the caller should wait between ticks.
    """

    def __init__(self, stepper: Stepper, interval: float = DEFAULT_TICK_INTERVAL):
        self.stepper:   Stepper = stepper
        self.interval:  float   = interval
        self._running:  bool    = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """Begin auto-stepping.  Returns False if there is nothing left to play."""
        self._running = self.stepper.can_step_forward()
        return self._running

    def stop(self) -> None:
        self._running = False

    def toggle(self) -> bool:
        if self._running:
            self.stop()
        else:
            self.start()
        return self._running

    def tick(self) -> Optional[Step]:
        """
        Advance one step if running.  Returns the new Step, or None when
        idle.  Stops automatically after the last step.
        """
        if not self._running:
            return None
        if not self.stepper.can_step_forward():
            self._running = False
            return None
        step = self.stepper.step_forward()
        if not self.stepper.can_step_forward():
            self._running = False
            logger.debug("run finished at step %d", self.stepper.cursor)
        return step

    def set_speed(self, preset: str) -> None:
        self.interval = SPEED_PRESETS.get(preset, DEFAULT_TICK_INTERVAL)

    def set_speed_value(self, seconds: float) -> None:
        self.interval = max(0.02, seconds)
