"""
node.py — Graph Node
====================
Identity (id, label) plus an opaque presentation color.

Design decisions:
  - `id` is a plain int handed out by the owning Graph.  Everything else
    (edges, snapshots, selections) refers to nodes by id, never by object.
  - `color` belongs to the user, not to the algorithms.  Visited / frontier
    / path highlighting lives in the Step snapshots and the solver output,
    so running an algorithm never touches this field.
"""

from typing import Optional


# ---------------------------------------------------------------------------
# Palette — the colors the front-end uses for presentation state
# ---------------------------------------------------------------------------
DEFAULT_COLOR = "#d3d3d3"   # light grey
START_COLOR   = "#008000"   # green — selected start node
END_COLOR     = "#0000ff"   # blue  — selected end node
PATH_COLOR    = "#ff0000"   # red   — on the highlighted shortest path


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Attributes:
        id    : Integer identifier, unique within its Graph.
        label : Human-readable name (defaults to str(id)).
        color : Presentation color.  Opaque to the core.
    """

    __slots__ = ("id", "label", "color")

    def __init__(
        self,
        node_id: int,
        label: Optional[str] = None,
        color: Optional[str] = None,
    ):
        self.id: int      = node_id
        self.label: str   = label if label is not None else str(node_id)
        self.color: str   = color or DEFAULT_COLOR

    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "color": self.color,
        }

    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
