"""
store.py — Snapshot Store
==========================
The frozen history of one algorithm run.  Built once from the fully
materialised step list and read-only from then on, so re-visiting step k
always hands back the identical Step object.
"""

from typing import Iterable, Iterator, Tuple

from algorithms.step import Step


class SnapshotStore:
    """Ordered, indexable, immutable sequence of Steps."""

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[Step]):
        self._steps: Tuple[Step, ...] = tuple(steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, idx: int) -> Step:
        return self._steps[idx]

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __bool__(self) -> bool:
        return bool(self._steps)

    @property
    def first(self) -> Step:
        return self._steps[0]

    @property
    def last(self) -> Step:
        return self._steps[-1]

    def __repr__(self) -> str:
        return f"SnapshotStore(steps={len(self._steps)})"
