"""
components.py — Connected Components
=====================================
Labels every node with the index of its connected component by running a
BFS from each node that no earlier sweep reached.  Needs no start node.

Yields a Step when:
  0. Nothing labelled yet
  1. A new component is opened at its lowest-id unlabelled node
  2. Each node is taken from the queue and labelled
  3. Final step  →  all nodes labelled

An empty graph yields no steps at all.
"""

from collections import deque
from typing import Iterator, List

from graph import Graph
from algorithms.step import Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def COMPONENTS(graph):",                   # 0
    "    label ← {}, c ← 0",                    # 1
    "    for node in graph (by id):",           # 2
    "        if node in label: continue",       # 3
    "        queue ← [node]",                   # 4
    "        while queue is not empty:",        # 5
    "            n ← queue.dequeue()",          # 6
    "            label[n] ← c",                 # 7
    "            enqueue unlabelled adj(n)",    # 8
    "        c ← c + 1",                        # 9
    "    return label",                         # 10
]


def components(graph: Graph) -> Iterator[Step]:
    """Yields Step snapshots while labelling connected components."""
    node_ids = sorted(graph.node_ids())
    if not node_ids:
        return

    sb = StepBuilder(node_ids)
    sb.pseudocode_line = 1
    sb.explanation = (
        f"{len(node_ids)} node(s) to label. Each BFS sweep from an unlabelled "
        f"node discovers exactly one connected component."
    )
    yield sb.build()

    seen = set()
    index = 0
    for root in node_ids:
        if root in seen:
            continue

        seen.add(root)
        queue = deque([root])
        sb.clear_focus()
        sb.set_frontier(queue)
        sb.pseudocode_line = 4
        sb.explanation = f"Node {root} is unlabelled: open component #{index} here."
        yield sb.build()

        while queue:
            node = queue.popleft()
            for nbr, edge in graph.neighbours(node):
                if nbr not in seen:
                    seen.add(nbr)
                    queue.append(nbr)
                    sb.tree_edge(edge.id)
            sb.mark(node, index)
            sb.visit(node)
            sb.set_current(node)
            sb.set_frontier(queue)
            sb.pseudocode_line = 7
            sb.explanation = f"Label node {node} with component #{index}."
            yield sb.build()

        index += 1

    sb.clear_focus()
    sb.set_frontier([])
    sb.pseudocode_line = 10
    sb.explanation = f"Done: {index} connected component(s)."
    yield sb.build(is_final=True)
