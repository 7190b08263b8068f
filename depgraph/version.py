"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Graph model**

- find / find_or_add / add_child builder API
- Root selection by name and version
- Orphan pruning, self-loop elimination and edge deduplication
- Importance filter with allowlist and excluded name fragments

**Output**

- Graphviz DOT rendering with per-kind node and edge styling
- networkx export and graph statistics

**CLI**

- depgraph command reading a resolved JSON tree
- Colored status output
"""
