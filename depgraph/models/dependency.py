"""
Resolved dependency and edge models.

This module defines the DepKind enum, the ResolvedDep node class and the
Edge class. Together they describe the contents of a DependencyGraph:
nodes are resolved packages, edges are parent -> child relations between
node slots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Sequence, TextIO

if TYPE_CHECKING:
    from depgraph.models.config import GraphConfig


class DepKind(str, Enum):
    """Enumeration of how a dependency is consumed.

    The kind is only used to pick label fragments when rendering.

    Attributes:
        BUILD: Needed to build the root package.
        DEV: Only needed for development (tests, examples, benchmarks).
        OPTIONAL: Pulled in by an optional feature.
        NORMAL: No particular classification; rendered without styling.
    """

    BUILD = "build"
    DEV = "dev"
    OPTIONAL = "optional"
    NORMAL = "normal"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible dependency kind values.

        Example:
            >>> DepKind.values()
            ['build', 'dev', 'optional', 'normal']
        """
        return [member.value for member in cls]


@dataclass
class ResolvedDep:
    """A resolved package in the dependency graph.

    Two ResolvedDep objects refer to the same package when their name and
    version match; ``kind`` does not take part in lookups.

    Attributes:
        name: Package name.
        version: Resolved version string.
        kind: How the package is consumed. Defaults to DepKind.NORMAL.

    Example:
        >>> dep = ResolvedDep(name="serde", version="1.0.1", kind=DepKind.BUILD)
        >>> dep.matches("serde", "1.0.1")
        True
    """

    name: str
    version: str
    kind: DepKind = field(default=DepKind.NORMAL, compare=False)

    def matches(self, name: str, version: str) -> bool:
        """Return True if this node is the package ``name`` at ``version``."""
        return self.name == name and self.version == version

    def label_text(self, include_version: bool = False) -> str:
        """Return the quoted-safe label text for this node."""
        text = self.name
        if include_version:
            text = f"{text} v{self.version}"
        return text.replace("\\", "\\\\").replace('"', '\\"')

    def label(self, output: TextIO, config: GraphConfig) -> None:
        """Write this node's label attribute list to ``output``.

        Args:
            output: Text sink positioned right after the node identifier.
            config: Rendering configuration providing the colour fragments.
        """
        fragment = config.node_fragment(self.kind)
        text = self.label_text(config.include_versions)
        output.write(f'[label="{text}"]{fragment};\n')

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass(frozen=True, order=True)
class Edge:
    """A parent -> child relation between two node slots.

    Edges compare and sort by ``(parent, child)``, which is what edge
    deduplication relies on.

    Attributes:
        parent: Slot of the depending package.
        child: Slot of the dependency.

    Example:
        >>> sorted([Edge(1, 2), Edge(0, 3), Edge(0, 1)])
        [Edge(parent=0, child=1), Edge(parent=0, child=3), Edge(parent=1, child=2)]
    """

    parent: int
    child: int

    def is_self_pointing(self) -> bool:
        """Return True if the edge starts and ends at the same slot."""
        return self.parent == self.child

    def touches(self, slot: int) -> bool:
        """Return True if either endpoint is ``slot``."""
        return self.parent == slot or self.child == slot

    def shifted_after(self, slot: int) -> Edge:
        """Return the edge renumbered for the removal of ``slot``.

        Every endpoint strictly greater than ``slot`` moves down by one.
        """
        parent = self.parent - 1 if self.parent > slot else self.parent
        child = self.child - 1 if self.child > slot else self.child
        return Edge(parent, child)

    def swapped(self, a: int, b: int) -> Edge:
        """Return the edge with slots ``a`` and ``b`` exchanged."""

        def _swap(slot: int) -> int:
            if slot == a:
                return b
            if slot == b:
                return a
            return slot

        return Edge(_swap(self.parent), _swap(self.child))

    def label(
        self,
        output: TextIO,
        nodes: Sequence[ResolvedDep],
        config: GraphConfig,
    ) -> None:
        """Write this edge's label attribute list to ``output``.

        The fragment is chosen from the kinds of both endpoints.

        Args:
            output: Text sink positioned right after ``N<a> -> N<b>``.
            nodes: Node list the edge's slots index into.
            config: Rendering configuration providing the line fragments.
        """
        fragment = config.edge_fragment(
            nodes[self.parent].kind, nodes[self.child].kind
        )
        output.write(f'[label=""]{fragment};\n')

    def __str__(self) -> str:
        return f"N{self.parent} -> N{self.child}"
