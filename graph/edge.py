"""
edge.py — Graph Edge
====================
Undirected link between two nodes.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.  The Graph
    is the arena; an Edge is just a pair of keys into it.
  - Endpoint order is only the order the user drew the edge in.
    Traversal works in both directions.
"""

from typing import Optional


class Edge:
    """
    Attributes:
        id     : Integer identifier, unique within its Graph.
        source : Id of the first endpoint.
        target : Id of the second endpoint.
    """

    __slots__ = ("id", "source", "target")

    def __init__(self, edge_id: int, source: int, target: int):
        self.id:     int = edge_id
        self.source: int = source
        self.target: int = target

    def connects(self, node_a: int, node_b: int) -> bool:
        """True if this edge links node_a and node_b, in either order."""
        return (self.source == node_a and self.target == node_b) or (
            self.source == node_b and self.target == node_a
        )

    def other_end(self, node_id: int) -> Optional[int]:
        """Given one endpoint, return the other.  None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
        }

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, id={self.id})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
