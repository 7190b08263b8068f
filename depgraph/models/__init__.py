"""
Data models for dependency graphs.

This package contains the core data structures of a dependency graph:
resolved dependency nodes, slot edges, dependency kinds and the rendering
configuration.
"""

from depgraph.models.config import GraphConfig
from depgraph.models.dependency import DepKind, Edge, ResolvedDep

__all__ = [
    "DepKind",
    "Edge",
    "GraphConfig",
    "ResolvedDep",
]
