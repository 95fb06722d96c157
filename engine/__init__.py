"""
engine/
-------
Warm-up & playback layer.

    from engine import Stepper, warm_up, AutoRunner, Selection
"""

from engine.store     import SnapshotStore
from engine.stepper   import Stepper, EngineState, warm_up, warm_up_async
from engine.runner    import AutoRunner, SPEED_PRESETS, DEFAULT_TICK_INTERVAL
from engine.selection import Selection

__all__ = [
    "SnapshotStore",
    "Stepper",
    "EngineState",
    "warm_up",
    "warm_up_async",
    "AutoRunner",
    "SPEED_PRESETS",
    "DEFAULT_TICK_INTERVAL",
    "Selection",
]
