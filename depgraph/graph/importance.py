"""
Importance filter for dependency graphs.

The importance filter drops every package a caller does not care about
just before a graph is rendered. It is expressed as a plain predicate over
ResolvedDep so the graph itself stays independent of any particular
allowlist.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Callable, Union

from depgraph.models.dependency import ResolvedDep

ImportancePredicate = Callable[[ResolvedDep], bool]

DEFAULT_EXCLUDE_FRAGMENTS = ("proto_",)


class ImportanceFilter:
    """Allowlist-based importance predicate.

    A package is important when its name is in the allowlist and does not
    contain any of the excluded name fragments. Generated protocol stub
    crates (``proto_*``) are excluded by default.

    Attributes:
        allowlist: Names of the packages to keep.
        exclude_fragments: Name fragments that always disqualify a package.

    Example:
        >>> keep = ImportanceFilter(["app", "proto_app"])
        >>> keep(ResolvedDep("app", "1.0"))
        True
        >>> keep(ResolvedDep("proto_app", "1.0"))
        False
    """

    def __init__(
        self,
        allowlist: Iterable[str],
        exclude_fragments: Iterable[str] = DEFAULT_EXCLUDE_FRAGMENTS,
    ) -> None:
        self.allowlist = frozenset(allowlist)
        self.exclude_fragments = tuple(exclude_fragments)

    def __call__(self, dep: ResolvedDep) -> bool:
        if any(fragment in dep.name for fragment in self.exclude_fragments):
            return False
        return dep.name in self.allowlist

    def __repr__(self) -> str:
        return (
            f"ImportanceFilter(allowlist={sorted(self.allowlist)!r}, "
            f"exclude_fragments={self.exclude_fragments!r})"
        )

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        exclude_fragments: Iterable[str] = DEFAULT_EXCLUDE_FRAGMENTS,
    ) -> ImportanceFilter:
        """Build a filter from a file with one package name per line.

        Blank lines and ``#`` comments are ignored.
        """
        text = Path(path).read_text(encoding="utf-8")
        return cls(parse_allowlist(text), exclude_fragments)


def parse_allowlist(text: str) -> list[str]:
    """Parse allowlist text into package names.

    Example:
        >>> parse_allowlist("app  # the root\\n\\nserde\\n")
        ['app', 'serde']
    """
    names = []
    for line in text.splitlines():
        name = line.split("#", 1)[0].strip()
        if name:
            names.append(name)
    return names
