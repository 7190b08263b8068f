"""
Utility modules for depgraph.
"""

from depgraph.utils.warnings import GraphWarning, WarningCollector

__all__ = ["GraphWarning", "WarningCollector"]
