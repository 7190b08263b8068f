"""
depgraph v1.0

Turn a resolved package dependency tree into a Graphviz digraph.

Example:
    >>> from depgraph import DependencyGraph
    >>> graph = DependencyGraph()
    >>> root = graph.find_or_add("app", "1.0.0")
    >>> graph.add_child(root, "serde", "1.0.1")
    1
    >>> dot = graph.render()
"""

from depgraph.version import __version__, __version_info__

__author__ = "depgraph Contributors"

from depgraph.exceptions import (
    DepGraphError,
    GraphConsumedError,
    RenderError,
    TreeFormatError,
)
from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.graph.importance import ImportanceFilter
from depgraph.models.config import GraphConfig
from depgraph.models.dependency import DepKind, Edge, ResolvedDep
from depgraph.resolver.tree_loader import load_tree, load_tree_file
from depgraph.utils.warnings import GraphWarning, WarningCollector

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Graph
    "DependencyGraph",
    "ImportanceFilter",
    # Configuration
    "GraphConfig",
    # Data models
    "DepKind",
    "Edge",
    "ResolvedDep",
    # Loading
    "load_tree",
    "load_tree_file",
    # Warnings
    "GraphWarning",
    "WarningCollector",
    # Exceptions
    "DepGraphError",
    "GraphConsumedError",
    "RenderError",
    "TreeFormatError",
]
