"""
graph.py — Graph Container
===========================
Single source of truth for the graph the user edits.  Algorithms, the
shortest-path solver and the HTTP layer all talk to this object.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, degree, …)
  3. Starter graph                          (sample)
  4. Copy & serialisation                   (copy / to_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by integer id for O(1) lookup.
    Ids are handed out from per-graph counters and never reused.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
    Lists keep insertion order, which makes every traversal deterministic.
  - Undirected only.  Self-loops are refused; parallel edges are allowed.
"""

from typing import Dict, List, Optional, Tuple, Union

from graph.node import Node
from graph.edge import Edge


NodeRef = Union[Node, int]


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes:    Dict[int, Node] = {}
        self.edges:    Dict[int, Edge] = {}
        self._adj:     Dict[int, List[Tuple[int, int]]] = {}   # node_id → [(nbr, edge_id)]
        self._next_node_id: int = 1
        self._next_edge_id: int = 1

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Node id {node.id} already exists")
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        self._next_node_id = max(self._next_node_id, node.id + 1)
        return node

    def create_node(
        self,
        label: Optional[str] = None,
        color: Optional[str] = None,
        node_id: Optional[int] = None,
    ) -> Node:
        """Convenience: create + add in one call."""
        if node_id is None:
            node_id = self._next_node_id
        return self.add_node(Node(node_id, label=label, color=color))

    def remove_node(self, node_id: int) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        for eid in [eid for _, eid in self._adj.get(node_id, [])]:
            self.remove_edge(eid)
        del self.nodes[node_id]
        self._adj.pop(node_id, None)

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    def resolve(self, ref: NodeRef) -> int:
        """Node or int id → id.  KeyError for anything else or a node not in this graph."""
        if isinstance(ref, Node):
            node_id = ref.id
        elif isinstance(ref, int) and not isinstance(ref, bool):
            node_id = ref
        else:
            raise KeyError(ref)
        if node_id not in self.nodes:
            raise KeyError(node_id)
        return node_id

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise KeyError(end)
        if edge.source == edge.target:
            raise ValueError(f"Self-loop on node {edge.source} is not allowed")
        if edge.id in self.edges:
            raise ValueError(f"Edge id {edge.id} already exists")
        self.edges[edge.id] = edge
        # maintain adjacency
        self._adj[edge.source].append((edge.target, edge.id))
        self._adj[edge.target].append((edge.source, edge.id))
        self._next_edge_id = max(self._next_edge_id, edge.id + 1)
        return edge

    def create_edge(self, source: NodeRef, target: NodeRef, edge_id: Optional[int] = None) -> Edge:
        source_id = source.id if isinstance(source, Node) else source
        target_id = target.id if isinstance(target, Node) else target
        if edge_id is None:
            edge_id = self._next_edge_id
        return self.add_edge(Edge(edge_id, source_id, target_id))

    def remove_edge(self, edge_id: int) -> None:
        if edge_id not in self.edges:
            return
        e = self.edges[edge_id]
        for end in (e.source, e.target):
            self._adj[end][:] = [(n, eid) for n, eid in self._adj[end] if eid != edge_id]
        del self.edges[edge_id]

    def get_edge(self, edge_id: int) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        """First edge connecting a and b."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[Tuple[int, Edge]]:
        """Return [(neighbour_id, edge)] in edge-insertion order."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def degree(self, node_id: int) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # FACTORIES / COPY
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """The triangle the editor opens with."""
        g = cls()
        g.create_node(label="1", node_id=1)
        g.create_node(label="23", node_id=2)
        g.create_node(label="3", node_id=3)
        g.create_edge(1, 2)
        g.create_edge(1, 3)
        g.create_edge(2, 3)
        return g

    def copy(self) -> "Graph":
        """Independent copy with the same ids, so snapshots line up."""
        g = Graph()
        for node in self.nodes.values():
            g.add_node(Node(node.id, label=node.label, color=node.color))
        for edge in self.edges.values():
            g.add_edge(Edge(edge.id, edge.source, edge.target))
        g._next_node_id = self._next_node_id
        g._next_edge_id = self._next_edge_id
        return g

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._adj.clear()

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, ref) -> bool:
        node_id = ref.id if isinstance(ref, Node) else ref
        return node_id in self.nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
