"""
Configuration model for graph rendering.

This module defines the GraphConfig class, which holds the label fragments
appended to node and edge declarations and the switches that control
finalization. The graph only borrows the configuration; it never mutates it.
"""

from dataclasses import dataclass

from depgraph.models.dependency import DepKind


@dataclass
class GraphConfig:
    """Configuration settings for rendering a dependency graph.

    Fragments are literal Graphviz attribute lists (``[style=dashed]``) that
    are appended verbatim after a declaration's label.

    Attributes:
        build_lines: Edge fragment for build -> build relations.
        dev_lines: Edge fragment for relations involving dev dependencies.
        optional_lines: Edge fragment for relations involving optional
            dependencies.
        build_color: Node fragment for build dependencies.
        dev_color: Node fragment for dev dependencies.
        optional_color: Node fragment for optional dependencies.
        include_versions: If True, node labels carry ``v<version>``.
            Defaults to False.
        filter_enabled: If False, the importance filter is never applied,
            even when a predicate is supplied. Defaults to True.

    Example:
        >>> config = GraphConfig(include_versions=True)
        >>> config.edge_fragment(DepKind.BUILD, DepKind.DEV)
        '[style=dashed]'
        >>> GraphConfig(dev_lines=GraphConfig.line_fragment("bold")).dev_lines
        '[style=bold]'
    """

    build_lines: str = "[style=solid]"
    dev_lines: str = "[style=dashed]"
    optional_lines: str = "[style=dotted]"
    build_color: str = "[color=black]"
    dev_color: str = "[color=blue]"
    optional_color: str = "[color=red]"
    include_versions: bool = False
    filter_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        for name in (
            "build_lines",
            "dev_lines",
            "optional_lines",
            "build_color",
            "dev_color",
            "optional_color",
        ):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string")
        if not isinstance(self.include_versions, bool):
            raise TypeError("include_versions must be a boolean")
        if not isinstance(self.filter_enabled, bool):
            raise TypeError("filter_enabled must be a boolean")

    @staticmethod
    def line_fragment(style: str) -> str:
        """Wrap a bare Graphviz edge style into an attribute list."""
        return f"[style={style}]"

    @staticmethod
    def color_fragment(color: str) -> str:
        """Wrap a bare Graphviz colour into an attribute list."""
        return f"[color={color}]"

    def node_fragment(self, kind: DepKind) -> str:
        """Return the fragment appended to a node of ``kind``."""
        if kind == DepKind.BUILD:
            return self.build_color
        if kind == DepKind.DEV:
            return self.dev_color
        if kind == DepKind.OPTIONAL:
            return self.optional_color
        return ""

    def edge_fragment(self, parent: DepKind, child: DepKind) -> str:
        """Return the fragment appended to an edge between two kinds.

        A dev parent always yields the dev fragment and an optional parent
        the optional fragment; a build parent takes the child's fragment.
        Any pairing with a NORMAL endpoint has no fragment.
        """
        if DepKind.NORMAL in (parent, child):
            return ""
        if parent == DepKind.DEV:
            return self.dev_lines
        if parent == DepKind.OPTIONAL:
            return self.optional_lines
        # parent is BUILD
        if child == DepKind.DEV:
            return self.dev_lines
        if child == DepKind.OPTIONAL:
            return self.optional_lines
        return self.build_lines
