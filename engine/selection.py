"""
selection.py — Start / End node selection
==========================================
Which nodes the user picked as path endpoints.  Zero, one or two at a
time; picking a third starts over with that node as the new start.
"""

from typing import Optional


class Selection:
    def __init__(self):
        self.start: Optional[int] = None
        self.end:   Optional[int] = None

    def select(self, node_id: int) -> None:
        if self.start is None:
            self.start = node_id
        elif self.end is None:
            self.end = node_id
        else:
            self.start = node_id
            self.end = None

    def discard(self, node_id: int) -> None:
        """Forget `node_id` if it is an endpoint (its node was removed)."""
        if self.start == node_id:
            self.start, self.end = self.end, None
        elif self.end == node_id:
            self.end = None

    def clear(self) -> None:
        self.start = None
        self.end = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}

    def __repr__(self) -> str:
        return f"Selection(start={self.start}, end={self.end})"
