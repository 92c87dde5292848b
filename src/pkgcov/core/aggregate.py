"""Group statement records by package and roll descendant statistics up."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from pkgcov._meta import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from pkgcov.core.profile import StatementRecord
    from pkgcov.core.types import PackageKey

ROOT_PACKAGE: PackageKey = "."


@dataclass(frozen=True, slots=True)
class CoverageNode:
    """Statement counts of one package.

    ``self_*`` counts come from files owned directly by the package,
    ``child_*`` counts are the sums over every strict descendant package.
    """

    self_statements: int = 0
    self_covered: int = 0
    child_statements: int = 0
    child_covered: int = 0

    @property
    def total_statements(self) -> int:
        return self.self_statements + self.child_statements

    @property
    def total_covered(self) -> int:
        return self.self_covered + self.child_covered


@dataclass(slots=True)
class _TreeNode:
    key: PackageKey
    self_statements: int = 0
    self_covered: int = 0
    children: list[_TreeNode] = field(default_factory=list)


class CoverageReport:
    """Read-only mapping of package key to :class:`CoverageNode`."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Mapping[PackageKey, CoverageNode] | None = None) -> None:
        self._nodes: Mapping[PackageKey, CoverageNode] = MappingProxyType(dict(nodes or {}))

    def __getitem__(self, key: PackageKey) -> CoverageNode:
        return self._nodes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[PackageKey]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"CoverageReport({dict(self._nodes)!r})"

    def packages(self) -> list[PackageKey]:
        """Return the package keys in lexicographic order."""
        return sorted(self._nodes)

    def items(self) -> list[tuple[PackageKey, CoverageNode]]:
        return [(k, self._nodes[k]) for k in self.packages()]


def package_key(file: str) -> PackageKey:
    """Return the package owning *file*: its directory portion."""
    return posixpath.dirname(file) or ROOT_PACKAGE


def parent_key(key: PackageKey) -> PackageKey | None:
    """Return the nearest enclosing package of *key*, or ``None`` at the top."""
    if key == ROOT_PACKAGE:
        return None
    parent = posixpath.dirname(key)
    if not parent or parent == key:
        return None
    return parent


def ancestors(key: PackageKey) -> list[PackageKey]:
    """Return every enclosing package of *key*, nearest first."""
    out: list[PackageKey] = []
    cur = parent_key(key)
    while cur is not None:
        out.append(cur)
        cur = parent_key(cur)
    return out


def _self_stats(records: Iterable[StatementRecord]) -> dict[PackageKey, _TreeNode]:
    nodes: dict[PackageKey, _TreeNode] = {}
    for rec in records:
        key = package_key(rec.file)
        node = nodes.get(key)
        if node is None:
            node = nodes[key] = _TreeNode(key)
        node.self_statements += rec.statements
        if rec.covered:
            node.self_covered += rec.statements
    return nodes


def _link(nodes: dict[PackageKey, _TreeNode]) -> list[_TreeNode]:
    """Attach every node to its parent, creating empty ancestors on the way."""
    pending = sorted(nodes)
    for key in pending:
        child = nodes[key]
        parent = parent_key(key)
        while parent is not None:
            existing = nodes.get(parent)
            if existing is not None:
                existing.children.append(child)
                break
            synthesized = nodes[parent] = _TreeNode(parent, children=[child])
            logger.debug("synthesized empty package %s", parent)
            child = synthesized
            parent = parent_key(parent)
    return [nodes[k] for k in sorted(nodes) if parent_key(k) is None]


def _rollup(roots: list[_TreeNode]) -> dict[PackageKey, CoverageNode]:
    """Post-order traversal summing each subtree into its root."""
    out: dict[PackageKey, CoverageNode] = {}
    # (node, children_done)
    stack: list[tuple[_TreeNode, bool]] = [(r, False) for r in roots]
    while stack:
        node, done = stack.pop()
        if not done:
            stack.append((node, True))
            stack.extend((c, False) for c in node.children)
            continue
        child_statements = child_covered = 0
        for c in node.children:
            sub = out[c.key]
            child_statements += sub.total_statements
            child_covered += sub.total_covered
        out[node.key] = CoverageNode(
            self_statements=node.self_statements,
            self_covered=node.self_covered,
            child_statements=child_statements,
            child_covered=child_covered,
        )
    return out


def aggregate(records: Iterable[StatementRecord]) -> CoverageReport:
    """Build the per-package report for *records*."""
    nodes = _self_stats(records)
    observed = len(nodes)
    roots = _link(nodes)
    logger.debug("aggregated %d packages (%d synthesized)", len(nodes), len(nodes) - observed)
    return CoverageReport(_rollup(roots))


__all__ = [
    "ROOT_PACKAGE",
    "CoverageNode",
    "CoverageReport",
    "aggregate",
    "ancestors",
    "package_key",
    "parent_key",
]
