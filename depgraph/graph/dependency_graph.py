"""
Dependency graph for resolved package trees.

This module defines the DependencyGraph class. A resolver feeds it one
discovered dependency edge at a time; the graph then finalizes itself
(deduplicate, prune orphans, drop self-loops, apply the importance filter)
and renders as a Graphviz digraph.

Nodes are addressed by their slot, i.e. their position in the node list.
Slots are not stable: removing a node renumbers every later node and every
edge endpoint that refers to it. Never hold on to a slot across a removal.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from typing import Optional, TextIO

import networkx as nx

from depgraph.exceptions import GraphConsumedError, RenderError
from depgraph.graph.importance import ImportancePredicate
from depgraph.models.config import GraphConfig
from depgraph.models.dependency import DepKind, Edge, ResolvedDep
from depgraph.utils.warnings import WarningCollector

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Slot-indexed dependency graph.

    Attributes:
        config: Rendering configuration. Borrowed, never modified.
        warnings: Collector for packages dropped during finalization.

    Example:
        >>> graph = DependencyGraph()
        >>> root = graph.find_or_add("app", "1.0")
        >>> graph.add_child(root, "serde", "1.0.1")
        1
        >>> graph.render().splitlines()[0]
        'digraph dependencies {'
    """

    def __init__(
        self,
        config: Optional[GraphConfig] = None,
        warnings: Optional[WarningCollector] = None,
    ) -> None:
        """Initialize an empty DependencyGraph.

        Args:
            config: Rendering configuration. Defaults to GraphConfig().
            warnings: Collector to report removals to. A new one is created
                when omitted.
        """
        self.config = config if config is not None else GraphConfig()
        self.warnings = warnings if warnings is not None else WarningCollector()
        self._nodes: list[ResolvedDep] = []
        self._edges: list[Edge] = []
        self._consumed = False

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[ResolvedDep, ...]:
        """Nodes in slot order."""
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Edges in insertion (or, after dedup, sorted) order."""
        return tuple(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    def get(self, slot: int) -> Optional[ResolvedDep]:
        """Return the node at ``slot``, or None if the slot is out of range."""
        if 0 <= slot < len(self._nodes):
            return self._nodes[slot]
        return None

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def find(self, name: str, version: str) -> Optional[int]:
        """Return the slot of ``name`` at ``version``, or None."""
        for slot, dep in enumerate(self._nodes):
            if dep.matches(name, version):
                return slot
        return None

    def find_or_add(
        self, name: str, version: str, kind: DepKind = DepKind.NORMAL
    ) -> int:
        """Return the slot of ``name`` at ``version``, adding it if needed.

        Args:
            name: Package name.
            version: Resolved version.
            kind: Kind given to the node when it is created. An existing
                node keeps its kind.

        Returns:
            The slot of the (possibly new) node.
        """
        slot = self.find(name, version)
        if slot is not None:
            return slot
        self._nodes.append(ResolvedDep(name=name, version=version, kind=kind))
        return len(self._nodes) - 1

    def add_child(
        self,
        parent: int,
        dep_name: str,
        dep_version: str,
        kind: DepKind = DepKind.NORMAL,
    ) -> int:
        """Record that the node at ``parent`` depends on a package.

        Args:
            parent: Slot of the depending node.
            dep_name: Name of the dependency.
            dep_version: Resolved version of the dependency.
            kind: Kind given to the dependency if it is new.

        Returns:
            The slot of the dependency.
        """
        child = self.find_or_add(dep_name, dep_version, kind)
        self._edges.append(Edge(parent, child))
        return child

    def set_kind(self, slot: int, kind: DepKind) -> None:
        """Change the kind of the node at ``slot``."""
        self._nodes[slot].kind = kind

    def set_root(self, name: str, version: str) -> bool:
        """Move ``name`` at ``version`` to slot 0.

        The node currently at slot 0 takes the root's former slot and every
        edge endpoint is transposed accordingly.

        Returns:
            False if the package is not in the graph, True otherwise.
        """
        root = self.find(name, version)
        if root is None:
            return False
        if root == 0:
            return True

        self._nodes[0], self._nodes[root] = self._nodes[root], self._nodes[0]
        self._edges = [edge.swapped(0, root) for edge in self._edges]
        logger.debug("set_root; %s@%s moved from slot %d", name, version, root)
        return True

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove(self, slot: int) -> ResolvedDep:
        """Remove the node at ``slot`` and every edge touching it.

        Edge endpoints above ``slot`` are shifted down by one so the node
        list stays contiguous.

        Returns:
            The removed node.
        """
        logger.debug("remove; index=%d", slot)
        dep = self._nodes.pop(slot)
        self._edges = [
            edge.shifted_after(slot)
            for edge in self._edges
            if not edge.touches(slot)
        ]
        return dep

    def remove_many(self, slots: Iterable[int]) -> list[ResolvedDep]:
        """Remove several nodes given as slots of the current graph.

        Slots are removed highest first, so each removal leaves the lower
        slots still to be removed untouched.

        Returns:
            The removed nodes, in ascending slot order.
        """
        removed = [self.remove(slot) for slot in sorted(set(slots), reverse=True)]
        removed.reverse()
        return removed

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def dedup_edges(self) -> None:
        """Sort edges by (parent, child) and drop duplicates."""
        before = len(self._edges)
        self._edges = sorted(set(self._edges))
        logger.debug("dedup_edges; dropped=%d", before - len(self._edges))

    def remove_orphans(self) -> None:
        """Remove nodes that are neither the root nor any edge's child.

        Edges pointing outside the node list are dropped first. Removing an
        orphan drops its outgoing edges, which may orphan its children, so
        marking is repeated until every remaining node is used.
        """
        count = len(self._nodes)
        self._edges = [
            edge
            for edge in self._edges
            if 0 <= edge.parent < count and 0 <= edge.child < count
        ]
        while self._nodes:
            used = [False] * len(self._nodes)
            used[0] = True
            for edge in self._edges:
                used[edge.child] = True

            unused = [slot for slot, is_used in enumerate(used) if not is_used]
            if not unused:
                break
            logger.debug("remove_orphans; removing=%s", unused)
            self.remove_many(unused)

    def remove_self_pointing(self) -> None:
        """Remove every edge whose parent and child are the same node."""
        self._edges = [
            edge for edge in self._edges if not edge.is_self_pointing()
        ]

    def apply_importance(
        self, importance: ImportancePredicate
    ) -> list[ResolvedDep]:
        """Remove every node the ``importance`` predicate rejects.

        Each removal is logged and recorded in the warning collector.

        Returns:
            The removed nodes, in their former slot order.
        """
        unimportant = [
            slot for slot, dep in enumerate(self._nodes) if not importance(dep)
        ]
        removed = self.remove_many(unimportant)
        for dep in removed:
            logger.info("Removing %s", dep.name)
            self.warnings.add_removed_warning(str(dep), "not important")
        return removed

    def finalize(self, importance: Optional[ImportancePredicate] = None) -> None:
        """Prepare the graph for rendering.

        Runs edge deduplication, orphan pruning and self-loop elimination,
        then prunes orphans once more for nodes whose only incoming edge was
        a self-loop. The importance filter runs last, and only when a
        predicate is given and ``config.filter_enabled`` is set.
        """
        self.dedup_edges()
        self.remove_orphans()
        self.remove_self_pointing()
        self.remove_orphans()
        if importance is not None and self.config.filter_enabled:
            self.apply_importance(importance)
        logger.debug("finalize; %r", self)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render_to(
        self,
        output: TextIO,
        importance: Optional[ImportancePredicate] = None,
    ) -> None:
        """Finalize the graph and write it to ``output`` as a digraph.

        The graph is consumed: it cannot be rendered again.

        Args:
            output: Writable text sink.
            importance: Optional importance predicate, see finalize().

        Raises:
            GraphConsumedError: If the graph was already rendered.
            RenderError: If writing to ``output`` fails.
        """
        if self._consumed:
            raise GraphConsumedError("Graph has already been rendered")
        self._consumed = True
        self.finalize(importance)

        try:
            output.write("digraph dependencies {\n")
            for slot, dep in enumerate(self._nodes):
                output.write(f"\tN{slot}")
                dep.label(output, self.config)
            for edge in self._edges:
                output.write(f"\t{edge}")
                edge.label(output, self._nodes, self.config)
            output.write("}\n")
        except (OSError, ValueError) as e:
            raise RenderError(f"render failed: {e}") from e

    def render(self, importance: Optional[ImportancePredicate] = None) -> str:
        """Finalize the graph and return the digraph text."""
        buffer = io.StringIO()
        self.render_to(buffer, importance)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def to_networkx(self) -> nx.DiGraph:
        """Export the graph as a networkx DiGraph keyed by slot."""
        graph = nx.DiGraph()
        for slot, dep in enumerate(self._nodes):
            graph.add_node(
                slot, name=dep.name, version=dep.version, kind=dep.kind.value
            )
        graph.add_edges_from((edge.parent, edge.child) for edge in self._edges)
        return graph

    def unreachable_slots(self) -> set[int]:
        """Return the slots that cannot be reached from the root.

        Unlike remove_orphans(), this follows edges transitively, so a
        cycle detached from the root shows up here.
        """
        if not self._nodes:
            return set()
        graph = self.to_networkx()
        reachable = nx.descendants(graph, 0) | {0}
        return set(graph.nodes) - reachable

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Node and edge totals, node counts per kind, and ``max_depth``,
            the largest shortest-path distance from the root.
        """
        stats = {
            "total_nodes": len(self._nodes),
            "total_edges": len(self._edges),
        }
        for kind in DepKind:
            stats[f"{kind.value}_nodes"] = sum(
                1 for dep in self._nodes if dep.kind == kind
            )

        max_depth = 0
        if self._nodes:
            lengths = nx.single_source_shortest_path_length(self.to_networkx(), 0)
            max_depth = max(lengths.values())
        stats["max_depth"] = max_depth
        return stats
