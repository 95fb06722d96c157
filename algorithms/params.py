"""
params.py — Algorithm parameter checks
=======================================
Start / target arguments may be a Node or a node id.  Both are turned into
ids here, or rejected with InvalidParameters before any Step is produced.
"""

from typing import Optional

from graph import Graph, NodeRef
from algorithms.errors import InvalidParameters


def require_node(graph: Graph, ref: Optional[NodeRef], name: str = "start") -> int:
    if ref is None:
        raise InvalidParameters(f"Please select a {name} node.")
    return _resolve(graph, ref, name)


def optional_node(graph: Graph, ref: Optional[NodeRef], name: str = "target") -> Optional[int]:
    if ref is None:
        return None
    return _resolve(graph, ref, name)


def _resolve(graph: Graph, ref: NodeRef, name: str) -> int:
    try:
        return graph.resolve(ref)
    except KeyError:
        raise InvalidParameters(f"The {name} node {ref!r} is not in the graph.") from None
