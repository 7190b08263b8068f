"""
Custom exception classes for dependency graph rendering.

This module defines all custom exceptions used throughout the depgraph
package. Graph-internal operations never raise; these exceptions cover the
edges of the system: reading a resolved tree, and writing the rendered
output.
"""

from typing import Optional


class DepGraphError(Exception):
    """Base exception class for all depgraph errors.

    This exception serves as the base class for all custom exceptions in the
    depgraph package and can be used to catch any graph-related error.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a DepGraphError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class RenderError(DepGraphError):
    """Exception raised when the rendered graph cannot be written.

    The output sink failed part way through rendering. The original
    exception is available as ``__cause__``.
    """


class GraphConsumedError(DepGraphError):
    """Exception raised when a graph is rendered a second time.

    Rendering finalizes the graph destructively, so a graph can only be
    rendered once.
    """


class TreeFormatError(DepGraphError):
    """Exception raised when a resolved dependency tree is malformed.

    Attributes:
        message: Error message describing the problem.
        path: Optional location inside the document, e.g.
            ``packages[3].dependencies[0]``.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize a TreeFormatError.

        Args:
            message: Error message describing the problem.
            path: Optional location of the offending value.
        """
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)
