"""
Warning collection for graph building and finalization.

Loading a resolved tree and finalizing a graph can drop data on purpose
(a root that is not in the tree, packages removed by the importance
filter). This module collects those notices so the CLI can report them
after the graph has been written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass
class GraphWarning:
    """Warning or notice raised while building or finalizing a graph.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Message text.
        context: Optional context, e.g. the package the notice is about.

    Example:
        >>> warning = GraphWarning(level="INFO", message="Removing prost")
        >>> warning.level
        'INFO'
    """

    level: str
    message: str
    context: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )


class WarningCollector:
    """Collects warnings and notices for later reporting.

    Attributes:
        warnings: GraphWarning objects in the order they were added.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Root not found")
        >>> collector.has_errors()
        False
        >>> len(collector.get_all())
        1
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[GraphWarning] = []

    def add(
        self, level: str, message: str, context: Optional[str] = None
    ) -> None:
        """Add a warning or notice.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Message text.
            context: Optional context information.
        """
        self.warnings.append(
            GraphWarning(level=level, message=message, context=context)
        )

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[GraphWarning]:
        """Get a copy of all collected warnings, in insertion order."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[GraphWarning]:
        """Get the warnings with the given severity level."""
        return [
            warning for warning in self.warnings if warning.level == level
        ]

    def clear(self) -> None:
        """Clear all collected warnings."""
        self.warnings.clear()

    def add_removed_warning(self, package: str, reason: str) -> None:
        """Record that a package was dropped from the graph.

        Args:
            package: Display name of the removed package.
            reason: Short reason, e.g. "not important".
        """
        self.add("INFO", f"Removing {package} ({reason})", package)

    def add_missing_root_warning(self, name: str, version: str) -> None:
        """Record that the requested root is not part of the graph."""
        message = (
            f"Root package '{name}@{version}' not found in the graph. "
            f"Keeping the first package as root."
        )
        self.add("WARNING", message, f"{name}@{version}")

    def get_summary(self) -> dict[str, int]:
        """Get a summary of warning counts by level.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add("INFO", "Info 1")
            >>> collector.add("WARNING", "Warning 1")
            >>> collector.get_summary() == {"INFO": 1, "WARNING": 1, "ERROR": 0}
            True
        """
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary
