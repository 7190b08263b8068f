"""
Tests for DependencyGraph building, root selection and node removal.

This module contains tests for find/find_or_add/add_child, set_root and
remove/remove_many, including the slot renumbering rules.
"""

import copy
import random
from collections import Counter

import pytest

from depgraph import DependencyGraph, DepKind, Edge


def named_edges(graph):
    """Return the edges as a multiset of (parent name, child name) pairs."""
    return Counter(
        (graph.nodes[e.parent].name, graph.nodes[e.child].name)
        for e in graph.edges
    )


class TestBuilder:
    """Tests for the builder API."""

    def setup_method(self):
        """Create an empty graph."""
        self.graph = DependencyGraph()

    def test_find_missing(self):
        """Test find on an empty graph."""
        assert self.graph.find("serde", "1.0") is None

    def test_find_or_add_is_idempotent(self):
        """Test repeated find_or_add returns the same slot."""
        first = self.graph.find_or_add("serde", "1.0")
        second = self.graph.find_or_add("serde", "1.0")

        assert first == second == 0
        assert len(self.graph) == 1

    def test_versions_are_distinct_nodes(self):
        """Test the same name at two versions gives two nodes."""
        a = self.graph.find_or_add("serde", "1.0")
        b = self.graph.find_or_add("serde", "2.0")

        assert a != b
        assert self.graph.find("serde", "2.0") == b

    def test_find_or_add_keeps_existing_kind(self):
        """Test kind only applies to newly created nodes."""
        slot = self.graph.find_or_add("cc", "1.0", DepKind.BUILD)
        self.graph.find_or_add("cc", "1.0", DepKind.DEV)

        assert self.graph.get(slot).kind == DepKind.BUILD

    def test_add_child(self):
        """Test add_child creates the child and the edge."""
        root = self.graph.find_or_add("app", "1.0")
        child = self.graph.add_child(root, "serde", "1.0", DepKind.BUILD)

        assert child == 1
        assert self.graph.edges == (Edge(0, 1),)
        assert self.graph.get(child).kind == DepKind.BUILD

    def test_add_child_reuses_existing_node(self):
        """Test add_child to a known package adds only an edge."""
        root = self.graph.find_or_add("app", "1.0")
        self.graph.add_child(root, "serde", "1.0")
        self.graph.add_child(root, "serde", "1.0")

        assert len(self.graph) == 2
        assert self.graph.edges == (Edge(0, 1), Edge(0, 1))

    def test_get_out_of_range(self):
        """Test get returns None outside the node list."""
        self.graph.find_or_add("app", "1.0")

        assert self.graph.get(1) is None
        assert self.graph.get(-1) is None

    def test_set_kind(self):
        """Test changing a node's kind."""
        slot = self.graph.find_or_add("app", "1.0")
        self.graph.set_kind(slot, DepKind.OPTIONAL)

        assert self.graph.get(slot).kind == DepKind.OPTIONAL

    def test_idempotent_lookup_random(self):
        """Test find_or_add idempotence over many names."""
        rng = random.Random(7)
        for _ in range(200):
            name = f"p{rng.randrange(30)}"
            before = len(self.graph)
            first = self.graph.find_or_add(name, "1.0")
            second = self.graph.find_or_add(name, "1.0")

            assert first == second
            assert len(self.graph) - before <= 1


class TestSetRoot:
    """Tests for root selection."""

    def setup_method(self):
        """Create a graph where the intended root is not first."""
        self.graph = DependencyGraph()
        lib = self.graph.find_or_add("lib", "0.1")
        app = self.graph.find_or_add("app", "1.0")
        self.graph.add_child(app, "lib", "0.1")
        self.graph.add_child(lib, "libc", "0.2")
        self.graph.add_child(app, "serde", "1.0")

    def test_missing_root(self):
        """Test set_root fails for an unknown package."""
        assert self.graph.set_root("nope", "1.0") is False
        assert self.graph.nodes[0].name == "lib"

    def test_root_already_first(self):
        """Test set_root on slot 0 is a no-op."""
        edges = self.graph.edges

        assert self.graph.set_root("lib", "0.1") is True
        assert self.graph.edges == edges

    def test_swap(self):
        """Test set_root swaps the root into slot 0."""
        assert self.graph.set_root("app", "1.0") is True

        assert self.graph.nodes[0].name == "app"
        assert self.graph.nodes[1].name == "lib"
        assert Edge(0, 1) in self.graph.edges
        assert Edge(1, 2) in self.graph.edges
        assert Edge(0, 3) in self.graph.edges

    def test_swap_preserves_structure(self):
        """Test set_root leaves the named edge multiset unchanged."""
        before = named_edges(self.graph)
        self.graph.set_root("serde", "1.0")

        assert self.graph.nodes[0].name == "serde"
        assert named_edges(self.graph) == before

    def test_swap_preserves_structure_random(self, random_graph):
        """Test set_root on random graphs."""
        rng = random.Random(11)
        for _ in range(50):
            graph = random_graph(rng)
            target = rng.randrange(len(graph))
            name = graph.nodes[target].name
            before = named_edges(graph)

            assert graph.set_root(name, "1.0") is True
            assert graph.nodes[0].name == name
            assert named_edges(graph) == before


class TestRemove:
    """Tests for node removal and slot shifting."""

    def setup_method(self):
        """Create a chain app -> a -> b -> c plus app -> c."""
        self.graph = DependencyGraph()
        app = self.graph.find_or_add("app", "1.0")
        a = self.graph.add_child(app, "a", "1.0")
        b = self.graph.add_child(a, "b", "1.0")
        self.graph.add_child(b, "c", "1.0")
        self.graph.add_child(app, "c", "1.0")

    def test_remove_middle(self):
        """Test removing a node drops its edges and shifts the rest."""
        removed = self.graph.remove(1)

        assert removed.name == "a"
        assert [n.name for n in self.graph.nodes] == ["app", "b", "c"]
        assert sorted(self.graph.edges) == [Edge(0, 2), Edge(1, 2)]

    def test_remove_last(self):
        """Test removing the last node needs no shifting."""
        self.graph.remove(3)

        assert sorted(self.graph.edges) == [Edge(0, 1), Edge(1, 2)]

    def test_remove_many(self):
        """Test batch removal with slots of the current graph."""
        removed = self.graph.remove_many([1, 3])

        assert [dep.name for dep in removed] == ["a", "c"]
        assert [n.name for n in self.graph.nodes] == ["app", "b"]
        assert self.graph.edges == ()

    def test_remove_many_ignores_duplicates(self):
        """Test a slot listed twice is removed once."""
        self.graph.remove_many([2, 2])

        assert [n.name for n in self.graph.nodes] == ["app", "a", "c"]

    @pytest.mark.parametrize("seed", range(5))
    def test_shift_correctness_random(self, seed, random_graph):
        """Test every edge survives renumbered or is dropped."""
        rng = random.Random(seed)
        graph = random_graph(rng)
        for slot in range(len(graph)):
            trial = copy.deepcopy(graph)
            trial.remove(slot)

            expected = [
                Edge(
                    e.parent - 1 if e.parent > slot else e.parent,
                    e.child - 1 if e.child > slot else e.child,
                )
                for e in graph.edges
                if slot not in (e.parent, e.child)
            ]
            assert list(trial.edges) == expected
            for e in trial.edges:
                assert e.parent < len(trial)
                assert e.child < len(trial)
