"""
Dependency graph module.

This package contains the slot-indexed DependencyGraph used to build,
finalize and render resolved dependency trees, and the importance filter
applied before rendering.
"""

from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.graph.importance import ImportanceFilter, ImportancePredicate

__all__ = [
    "DependencyGraph",
    "ImportanceFilter",
    "ImportancePredicate",
]
