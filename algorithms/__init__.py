"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the stepper knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, requires_start, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the HTTP layer both
consume it, so adding an algorithm is: write the generator, add one entry
here.  The set is fixed at import time.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs        import bfs        as _bfs,        PSEUDOCODE as _bfs_pc
from algorithms.dfs        import dfs        as _dfs,        PSEUDOCODE as _dfs_pc
from algorithms.components import components as _components, PSEUDOCODE as _comp_pc
from algorithms.step          import Step, StepBuilder, NodeState, EdgeState
from algorithms.shortest_path import find_shortest_path, path_edges
from algorithms.errors import (
    GraphStepError,
    InvalidParameters,
    NoSteps,
    EmptyGraph,
    CannotStep,
    AlgorithmError,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable               # the generator function
    pseudocode:        List[str]              # lines for the side-panel
    requires_start:    bool     = True        # needs a start node?
    accepts_target:    bool     = False       # stops early at an end node?
    tags:              List[str] = field(default_factory=list)
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "requires_start":   self.requires_start,
            "accepts_target":   self.accepts_target,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        accepts_target=True,
        tags=["traversal", "shortest-path"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Reaches every node by the fewest hops.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        accepts_target=True,
        tags=["traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "components": AlgoInfo(
        key="components", label="Connected Components", fn=_components, pseudocode=_comp_pc,
        requires_start=False,
        tags=["traversal", "whole-graph"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Sweeps the whole graph and labels each connected piece.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithm_names() -> List[str]:
    return list(REGISTRY.keys())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithm_names",
    "algorithms_by_tag",
    "Step",
    "StepBuilder",
    "NodeState",
    "EdgeState",
    "find_shortest_path",
    "path_edges",
    "GraphStepError",
    "InvalidParameters",
    "NoSteps",
    "EmptyGraph",
    "CannotStep",
    "AlgorithmError",
]
