"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal.  Yields a Step at every meaningful event:
  0. Initial state   →  nothing visited, source waiting in the queue
  1. Dequeue a node  →  mark it CURRENT
  2. Examine each incident edge  →  RELAXED, then TREE (new) or IGNORED
  3. Node finished   →  VISITED
  4. Final step      →  everything reachable visited, or the hop-shortest
                        path to the target highlighted

Marks carry the hop distance from the source.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the front-end can highlight them live.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional

from graph import Graph, NodeRef
from algorithms.params import optional_node, require_node
from algorithms.step import Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start, target=None):",      # 0
    "    queue ← [start]",                      # 1
    "    seen ← {start}",                       # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        if node == target: return path",   # 5
    "        for neighbour in adj(node):",      # 6
    "            if neighbour not in seen:",    # 7
    "                seen.add(neighbour)",      # 8
    "                queue.enqueue(neighbour)", # 9
    "        mark node visited",                # 10
    "    return seen",                          # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    graph: Graph,
    start: Optional[NodeRef] = None,
    target: Optional[NodeRef] = None,
) -> Iterator[Step]:
    """
    Yields Step snapshots for every event during BFS execution.

    Args:
        graph  : The graph to traverse.
        start  : Starting node (Node or id).  Required.
        target : Optional goal; the run stops once it is dequeued.

    Raises:
        InvalidParameters – start missing, or start / target not in the graph.
    """

    source = require_node(graph, start, "start")
    goal   = optional_node(graph, target, "target")

    sb     = StepBuilder(graph.node_ids())
    queue  = deque([source])
    seen   = {source}
    parent: Dict[int, Optional[int]] = {source: None}
    via:    Dict[int, int]           = {}      # node → edge it was discovered through
    sb.mark(source, 0)

    # --- initialisation step ---
    sb.set_frontier(queue)
    sb.pseudocode_line = 1
    sb.explanation = (
        f"Initialise: node {source} is placed into the queue. "
        f"BFS explores layer by layer from here."
    )
    yield sb.build()

    # --- main loop ---
    while queue:
        node = queue.popleft()

        # -- dequeue event --
        sb.set_current(node)
        sb.examine_edge(None)
        sb.set_frontier(queue)
        sb.pseudocode_line = 4
        sb.explanation = (
            f"Dequeue node {node} (hop distance {sb.marks[node]}). "
            f"BFS always expands the node that was discovered earliest."
        )
        yield sb.build()

        # -- target check --
        if node == goal:
            path = _reconstruct(parent, node)
            sb.visit(node)
            sb.clear_focus()
            sb.set_frontier(queue)
            sb.set_path(path, [via[n] for n in path[1:]])
            sb.pseudocode_line = 5
            sb.explanation = (
                f"Target {goal} reached. The shortest path has "
                f"{len(path) - 1} edge(s): {' → '.join(map(str, path))}"
            )
            yield sb.build(is_final=True)
            return

        # -- explore neighbours --
        for nbr, edge in graph.neighbours(node):
            sb.examine_edge(edge.id)
            if nbr in seen:
                sb.ignore_edge(edge.id)
                sb.pseudocode_line = 7
                sb.explanation = f"Edge {node}–{nbr}: node {nbr} already seen, skip."
            else:
                seen.add(nbr)
                parent[nbr] = node
                via[nbr] = edge.id
                queue.append(nbr)
                sb.tree_edge(edge.id)
                sb.mark(nbr, sb.marks[node] + 1)
                sb.set_frontier(queue)
                sb.pseudocode_line = 9
                sb.explanation = (
                    f"Edge {node}–{nbr}: node {nbr} is new, enqueue it "
                    f"at hop distance {sb.marks[nbr]}."
                )
            yield sb.build()

        # -- finished with this node --
        sb.visit(node)
        sb.examine_edge(None)
        sb.pseudocode_line = 10
        sb.explanation = f"All neighbours of node {node} examined, it is now VISITED."
        yield sb.build()

    # --- queue exhausted ---
    sb.clear_focus()
    sb.set_frontier([])
    sb.pseudocode_line = 11
    if goal is None:
        sb.explanation = (
            f"Queue is empty. {len(sb.visited)} node(s) reachable from {source}."
        )
    else:
        sb.explanation = f"Queue is empty. Node {goal} is NOT reachable from {source}."
    yield sb.build(is_final=True)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[int, Optional[int]], target: int) -> List[int]:
    path = []
    cur: Optional[int] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
