"""Shared test fixtures for the graph step visualizer."""

from __future__ import annotations

import pytest

from graph import Graph
from main import create_app


def build_graph(node_ids, edges) -> Graph:
    g = Graph()
    for nid in node_ids:
        g.create_node(node_id=nid)
    for a, b in edges:
        g.create_edge(a, b)
    return g


@pytest.fixture
def triangle() -> Graph:
    """Nodes {1,2,3}, edges 1-2, 1-3, 2-3."""
    return build_graph([1, 2, 3], [(1, 2), (1, 3), (2, 3)])


@pytest.fixture
def chain() -> Graph:
    """1 - 2 - 3 - 4 - 5"""
    return build_graph([1, 2, 3, 4, 5], [(1, 2), (2, 3), (3, 4), (4, 5)])


@pytest.fixture
def split() -> Graph:
    """Two pieces: 1-2-3 and 4-5, plus isolated 6."""
    return build_graph([1, 2, 3, 4, 5, 6], [(1, 2), (2, 3), (4, 5)])


@pytest.fixture
def app():
    return create_app({"TESTING": True, "TICK_INTERVAL_MS": 100})


@pytest.fixture
def client(app):
    return app.test_client()
