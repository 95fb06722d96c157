"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  0. Start node pushed onto the stack, nothing visited
  1. Pop a node  →  CURRENT, VISITED (or skipped if already visited)
  2. Examine each neighbour  →  edge RELAXED / IGNORED
  3. Target found  →  path via parent map
  4. Stack empty  →  traversal complete

Neighbours are pushed in reverse adjacency order so they are explored
in adjacency order.  Marks carry the depth in the DFS tree.
"""

from typing import Dict, Iterator, List, Optional

from graph import Graph, NodeRef
from algorithms.params import optional_node, require_node
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start, target=None):",      # 0
    "    stack ← [start]",                      # 1
    "    visited ← {}",                         # 2
    "    while stack is not empty:",            # 3
    "        node ← stack.pop()",               # 4
    "        if node in visited: continue",     # 5
    "        visited.add(node)",                # 6
    "        if node == target: return path",   # 7
    "        for neighbour in adj(node):",      # 8
    "            if neighbour not visited:",    # 9
    "                stack.push(neighbour)",    # 10
    "    return visited",                       # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(
    graph: Graph,
    start: Optional[NodeRef] = None,
    target: Optional[NodeRef] = None,
) -> Iterator[Step]:
    """
    Iterative DFS with parent tracking for path reconstruction.

    Uses the "mark on pop" strategy: a node may sit on the stack more than
    once, the most recent push decides its parent.
    """

    source = require_node(graph, start, "start")
    goal   = optional_node(graph, target, "target")

    sb      = StepBuilder(graph.node_ids())
    stack   = [source]
    visited = set()
    parent: Dict[int, Optional[int]] = {source: None}
    via:    Dict[int, int]           = {}

    # --- init step ---
    sb.set_frontier(stack)
    sb.pseudocode_line = 1
    sb.explanation = (
        f"Initialise: push node {source} onto the stack. "
        f"DFS dives as deep as possible before backtracking."
    )
    yield sb.build()

    # --- main loop ---
    while stack:
        node = stack.pop()

        # already visited (can happen because we mark-on-pop)
        if node in visited:
            sb.set_current(None)
            sb.examine_edge(None)
            sb.set_frontier(reversed(stack))
            sb.pseudocode_line = 5
            sb.explanation = f"Pop node {node}: already visited, skip."
            yield sb.build()
            continue

        # -- pop & visit --
        visited.add(node)
        up = parent.get(node)
        sb.mark(node, 0 if up is None else sb.marks[up] + 1)
        if node in via:
            sb.tree_edge(via[node])
        sb.visit(node)
        sb.set_current(node)
        sb.examine_edge(None)
        sb.set_frontier(reversed(stack))
        sb.pseudocode_line = 6
        sb.explanation = (
            f"Pop node {node} and mark it VISITED at depth {sb.marks[node]}. "
            f"DFS explores its neighbours before coming back."
        )
        yield sb.build()

        # -- target check --
        if node == goal:
            path = _reconstruct(parent, node)
            sb.clear_focus()
            sb.set_path(path, [via[n] for n in path[1:]])
            sb.pseudocode_line = 7
            sb.explanation = (
                f"Target {goal} found. Path: {' → '.join(map(str, path))} "
                f"({len(path) - 1} edge(s)). DFS paths are not necessarily shortest."
            )
            yield sb.build(is_final=True)
            return

        # -- explore neighbours --
        for nbr, edge in reversed(graph.neighbours(node)):
            sb.examine_edge(edge.id)
            if nbr in visited:
                sb.ignore_edge(edge.id)
                sb.pseudocode_line = 9
                sb.explanation = f"Edge {node}–{nbr}: node {nbr} already visited, ignore."
            else:
                parent[nbr] = node
                via[nbr] = edge.id
                stack.append(nbr)
                sb.set_frontier(reversed(stack))
                sb.pseudocode_line = 10
                sb.explanation = f"Edge {node}–{nbr}: push node {nbr} onto the stack."
            yield sb.build()

    # --- stack exhausted ---
    sb.clear_focus()
    sb.set_frontier([])
    sb.pseudocode_line = 11
    if goal is None:
        sb.explanation = f"Stack empty. {len(visited)} node(s) reachable from {source}."
    else:
        sb.explanation = f"Stack empty. Node {goal} is NOT reachable from {source}."
    yield sb.build(is_final=True)


# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[int, Optional[int]], target: int) -> List[int]:
    path, cur = [], target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
