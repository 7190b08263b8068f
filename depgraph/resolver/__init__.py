"""
Resolved tree loading.

This package replays an already-resolved dependency tree into a
DependencyGraph.
"""

from depgraph.resolver.tree_loader import (
    load_tree,
    load_tree_file,
    parse_package_ref,
)

__all__ = ["load_tree", "load_tree_file", "parse_package_ref"]
