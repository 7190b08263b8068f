"""
Resolved dependency tree loader.

This module reads an already-resolved dependency tree from a JSON document
and replays it into a DependencyGraph through the builder API
(find_or_add, add_child, set_root), the same way a live resolver would.

Document shape::

    {
      "root": {"name": "app", "version": "1.0.0"},
      "packages": [
        {"name": "app", "version": "1.0.0", "kind": "build",
         "dependencies": [{"name": "serde", "version": "1.0.1"}]}
      ]
    }

``root`` and each package's ``kind`` and ``dependencies`` are optional.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from depgraph.exceptions import TreeFormatError
from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.models.config import GraphConfig
from depgraph.models.dependency import DepKind
from depgraph.utils.warnings import WarningCollector

logger = logging.getLogger(__name__)


def load_tree(
    data: dict[str, Any],
    config: Optional[GraphConfig] = None,
    warnings: Optional[WarningCollector] = None,
) -> DependencyGraph:
    """Build a DependencyGraph from a resolved tree document.

    Args:
        data: Parsed JSON document.
        config: Rendering configuration for the new graph.
        warnings: Collector for non-fatal problems such as a missing root.

    Returns:
        The built, not yet finalized, graph.

    Raises:
        TreeFormatError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise TreeFormatError("Resolved tree must be a JSON object")

    packages = data.get("packages", [])
    if not isinstance(packages, list):
        raise TreeFormatError("'packages' must be a list", "packages")

    root = data.get("root")
    root_key = None
    if root is not None:
        root_key = _package_key(root, "root")

    kinds: dict[tuple[str, str], DepKind] = {}
    parsed = []
    for i, package in enumerate(packages):
        location = f"packages[{i}]"
        key = _package_key(package, location)
        kinds[key] = _parse_kind(package.get("kind"), f"{location}.kind")
        dependencies = package.get("dependencies", [])
        if not isinstance(dependencies, list):
            raise TreeFormatError(
                "'dependencies' must be a list", f"{location}.dependencies"
            )
        children = [
            _package_key(dep, f"{location}.dependencies[{j}]")
            for j, dep in enumerate(dependencies)
        ]
        parsed.append((key, children))

    graph = DependencyGraph(config, warnings)
    if root_key is not None and root_key in kinds:
        graph.find_or_add(*root_key, kinds[root_key])

    for key, children in parsed:
        parent = graph.find_or_add(*key, kinds[key])
        for child in children:
            graph.add_child(parent, *child, kinds.get(child, DepKind.NORMAL))

    if root_key is not None and not graph.set_root(*root_key):
        logger.debug("Root %s@%s not found in tree", *root_key)
        graph.warnings.add_missing_root_warning(*root_key)

    logger.debug("load_tree; %r", graph)
    return graph


def load_tree_file(
    path: Union[str, Path],
    config: Optional[GraphConfig] = None,
    warnings: Optional[WarningCollector] = None,
) -> DependencyGraph:
    """Read a resolved tree JSON file and build a DependencyGraph.

    Raises:
        TreeFormatError: If the file is not valid JSON or is malformed.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"Invalid JSON in {path}: {e}") from e
    return load_tree(data, config, warnings)


def parse_package_ref(ref: str) -> tuple[str, str]:
    """Parse a ``name@version`` package reference.

    Raises:
        ValueError: If the reference has no version part.

    Example:
        >>> parse_package_ref("serde@1.0.1")
        ('serde', '1.0.1')
    """
    name, sep, version = ref.rpartition("@")
    if not sep or not name or not version:
        raise ValueError(
            f"Invalid package reference: '{ref}'. "
            f"Expected format: 'name@version'"
        )
    return name, version


def _package_key(entry: Any, location: str) -> tuple[str, str]:
    if not isinstance(entry, dict):
        raise TreeFormatError("Package entry must be an object", location)
    name = entry.get("name")
    version = entry.get("version")
    if not isinstance(name, str) or not name:
        raise TreeFormatError("Package 'name' must be a non-empty string", location)
    if not isinstance(version, str) or not version:
        raise TreeFormatError(
            "Package 'version' must be a non-empty string", location
        )
    return name, version


def _parse_kind(value: Any, location: str) -> DepKind:
    if value is None:
        return DepKind.NORMAL
    try:
        return DepKind(value)
    except ValueError:
        raise TreeFormatError(
            f"Unknown dependency kind {value!r}, "
            f"expected one of {DepKind.values()}",
            location,
        ) from None
