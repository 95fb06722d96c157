"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
"""

from graph.node  import Node, DEFAULT_COLOR, START_COLOR, END_COLOR, PATH_COLOR
from graph.edge  import Edge
from graph.graph import Graph, NodeRef

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "NodeRef",
    "DEFAULT_COLOR",
    "START_COLOR",
    "END_COLOR",
    "PATH_COLOR",
]
