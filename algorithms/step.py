"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the front-end
needs to render one frame:

    • The state of every node (unvisited / frontier / current / visited / path)
    • Which edges are relaxed / ignored / tree / path
    • The visit order and the current queue or stack contents
    • A per-node integer mark (BFS hop distance, DFS depth, component index)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened

Design decisions:
  - Step is a frozen dataclass whose fields are all tuples, so a Step is
    hashable and two Steps compare equal exactly when they render the same.
    The algorithm generator is the only writer; the stepper / front-end are
    pure readers.
  - `node_states` covers EVERY node of the graph, so any single Step can be
    rendered without replaying the ones before it.  `edge_states` lists only
    edges that are not in the default state.
  - Everything is keyed by node / edge id, never by object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple


# ---------------------------------------------------------------------------
# State vocabularies
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED  = "unvisited"   # not reached yet
    FRONTIER   = "frontier"    # seen, waiting in the queue / stack
    CURRENT    = "current"     # the node being expanded RIGHT NOW
    VISITED    = "visited"     # fully processed
    PATH       = "path"        # on the reconstructed path


class EdgeState(Enum):
    DEFAULT    = "default"
    RELAXED    = "relaxed"     # the edge being examined RIGHT NOW
    IGNORED    = "ignored"     # examined, led nowhere new
    TREE       = "tree"        # discovery edge of the search tree
    PATH       = "path"        # on the reconstructed path


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        current_node    : Id of the node being processed right now (or None).
        current_edge    : Id of the edge being examined right now (or None).
        node_states     : ((node_id, state), …) for every node, sorted by id.
        edge_states     : ((edge_id, state), …) for non-default edges, sorted by id.
        visited         : Node ids fully processed so far, in visit order.
        frontier        : Node ids in the queue / stack, front first.
        path            : Node ids of the path found (empty if none).
        marks           : ((node_id, value), …) algorithm-specific integer mark.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text.
        is_final        : True on the very last step.
    """

    step_number:      int                          = 0
    current_node:     Optional[int]                = None
    current_edge:     Optional[int]                = None
    node_states:      Tuple[Tuple[int, str], ...]  = ()
    edge_states:      Tuple[Tuple[int, str], ...]  = ()
    visited:          Tuple[int, ...]              = ()
    frontier:         Tuple[int, ...]              = ()
    path:             Tuple[int, ...]              = ()
    marks:            Tuple[Tuple[int, int], ...]  = ()
    pseudocode_line:  int                          = 0
    explanation:      str                          = ""
    is_final:         bool                         = False

    def state_of(self, node_id: int) -> Optional[str]:
        return dict(self.node_states).get(node_id)

    def edge_state_of(self, edge_id: int) -> str:
        return dict(self.edge_states).get(edge_id, EdgeState.DEFAULT.value)

    def mark_of(self, node_id: int) -> Optional[int]:
        return dict(self.marks).get(node_id)

    def to_dict(self) -> dict:
        return {
            "step_number":     self.step_number,
            "current_node":    self.current_node,
            "current_edge":    self.current_edge,
            "node_states":     dict(self.node_states),
            "edge_states":     dict(self.edge_states),
            "visited":         list(self.visited),
            "frontier":        list(self.frontier),
            "path":            list(self.path),
            "marks":           dict(self.marks),
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "is_final":        self.is_final,
        }


# ---------------------------------------------------------------------------
# Builder the algorithms write through
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.

    The builder lives for the whole run and accumulates state; `build()`
    freezes a copy.  `current` and `frontier` are overlays applied at build
    time on top of the persistent unvisited / visited / path states.

    Usage inside an algorithm generator:
        sb = StepBuilder(graph.node_ids())
        sb.set_current(3)
        sb.set_frontier([4, 5])
        sb.explanation = "Node 3 was dequeued because it was discovered first."
        yield sb.build()
    """

    def __init__(self, node_ids: Iterable[int]):
        self._node_ids: List[int] = sorted(node_ids)
        self._step_no: int = 0
        self.current_node:     Optional[int]       = None
        self.current_edge:     Optional[int]       = None
        self.node_states:      Dict[int, str]      = {
            nid: NodeState.UNVISITED.value for nid in self._node_ids
        }
        self.edge_states:      Dict[int, str]      = {}
        self.visited:          List[int]           = []
        self.frontier:         List[int]           = []
        self.path:             List[int]           = []
        self.marks:            Dict[int, int]      = {}
        self.pseudocode_line:  int                 = 0
        self.explanation:      str                 = ""

    # -- helpers --
    def visit(self, node_id: int):
        self.node_states[node_id] = NodeState.VISITED.value
        if node_id not in self.visited:
            self.visited.append(node_id)

    def set_current(self, node_id: Optional[int]):
        self.current_node = node_id

    def set_frontier(self, nodes: Iterable[int]):
        self.frontier = list(nodes)

    def examine_edge(self, edge_id: Optional[int]):
        self.current_edge = edge_id

    def ignore_edge(self, edge_id: int):
        if edge_id not in self.edge_states:
            self.edge_states[edge_id] = EdgeState.IGNORED.value

    def tree_edge(self, edge_id: int):
        self.edge_states[edge_id] = EdgeState.TREE.value

    def mark(self, node_id: int, value: int):
        self.marks[node_id] = value

    def clear_focus(self):
        self.current_node = None
        self.current_edge = None

    def set_path(self, path: List[int], edge_ids: Iterable[int] = ()):
        self.path = list(path)
        for n in path:
            self.node_states[n] = NodeState.PATH.value
        for eid in edge_ids:
            self.edge_states[eid] = EdgeState.PATH.value

    def build(self, is_final: bool = False) -> Step:
        node_states = dict(self.node_states)
        for n in self.frontier:
            if node_states.get(n) == NodeState.UNVISITED.value:
                node_states[n] = NodeState.FRONTIER.value
        if self.current_node is not None:
            node_states[self.current_node] = NodeState.CURRENT.value

        edge_states = dict(self.edge_states)
        if self.current_edge is not None:
            edge_states[self.current_edge] = EdgeState.RELAXED.value

        step = Step(
            step_number=self._step_no,
            current_node=self.current_node,
            current_edge=self.current_edge,
            node_states=tuple(sorted(node_states.items())),
            edge_states=tuple(sorted(edge_states.items())),
            visited=tuple(self.visited),
            frontier=tuple(self.frontier),
            path=tuple(self.path),
            marks=tuple(sorted(self.marks.items())),
            pseudocode_line=self.pseudocode_line,
            explanation=self.explanation,
            is_final=is_final,
        )
        self._step_no += 1
        return step
