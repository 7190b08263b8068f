"""Shared fixtures for depgraph tests."""

import pytest

from depgraph import DependencyGraph


def _random_graph(rng, nodes=8, edges=14):
    graph = DependencyGraph()
    for i in range(nodes):
        graph.find_or_add(f"p{i}", "1.0")
    for _ in range(edges):
        parent = rng.randrange(nodes)
        child = rng.randrange(nodes)
        graph.add_child(parent, f"p{child}", "1.0")
    return graph


@pytest.fixture
def random_graph():
    """Factory for graphs with random edges, duplicates and self-loops included."""
    return _random_graph
