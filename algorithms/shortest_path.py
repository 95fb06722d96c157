"""
shortest_path.py — One-shot unweighted shortest path
=====================================================
Plain BFS from start to end over the undirected graph.  Unlike the
stepping algorithms this records no Steps; it just answers the question.

    path = find_shortest_path(start, end, graph)   # [Node, …] or []

An empty list means "unreachable" and is a normal answer, not an error.
"""

import logging
from collections import deque
from typing import Dict, List, Optional

from graph import Edge, Graph, Node, NodeRef
from algorithms.errors import InvalidParameters

logger = logging.getLogger(__name__)


def find_shortest_path(
    start: Optional[NodeRef],
    end: Optional[NodeRef],
    graph: Graph,
) -> List[Node]:
    """
    Fewest-edges path from start to end, both inclusive.

    Args:
        start, end : Nodes (or node ids) of `graph`.  Either may be None when
                     the user has not finished selecting.
        graph      : The graph to search.

    Returns:
        [start, …, end]; [start] when start == end; [] when unreachable.

    Raises:
        InvalidParameters – an endpoint is missing or not in the graph.
    """
    if start is None or end is None:
        raise InvalidParameters("Please select start and end nodes.")
    try:
        source = graph.resolve(start)
        target = graph.resolve(end)
    except KeyError as exc:
        raise InvalidParameters(f"Node {exc.args[0]!r} is not in the graph.") from None

    if source == target:
        return [graph.nodes[source]]

    parent: Dict[int, Optional[int]] = {source: None}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for nbr, _ in graph.neighbours(node):
            if nbr in parent:
                continue
            parent[nbr] = node
            if nbr == target:
                path = _reconstruct(parent, target)
                logger.debug("shortest path %s -> %s: %s", source, target, path)
                return [graph.nodes[n] for n in path]
            queue.append(nbr)

    logger.debug("no path between %s and %s", source, target)
    return []


def path_edges(graph: Graph, path: List[Node]) -> List[Edge]:
    """The edges joining consecutive nodes of `path`, for highlighting."""
    edges = []
    for a, b in zip(path, path[1:]):
        e = graph.get_edge_between(a.id, b.id)
        if e is not None:
            edges.append(e)
    return edges


def _reconstruct(parent: Dict[int, Optional[int]], target: int) -> List[int]:
    path = []
    cur: Optional[int] = target
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path
