"""Predicates deciding which directories and files take part in discovery."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from pathspec import PathSpec

from pkgcov._meta import logger
from pkgcov.core.config import FIXTURE_DIR, PROFILE_SUFFIX, SOURCE_SUFFIXES, VENDOR_DIR

if TYPE_CHECKING:
    from collections.abc import Sequence


def _is_hidden(name: str) -> bool:
    return name.startswith((".", "_"))


def should_skip_directory(name: str) -> bool:
    """Return ``True`` if a directory called *name* must not be descended into."""
    return _is_hidden(name) or name in {FIXTURE_DIR, VENDOR_DIR}


def is_candidate_source_directory(path: Path, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> bool:
    """Return ``True`` if *path* directly contains a buildable source file.

    A directory without sources is simply not a candidate. A directory that
    cannot be listed is logged and treated the same way.
    """
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if _is_hidden(entry.name) or not entry.name.endswith(tuple(suffixes)):
                    continue
                if entry.is_file():
                    return True
    except OSError as exc:
        logger.warning("failed to list '%s': %s", path, exc)
    return False


def is_candidate_profile_file(name: str) -> bool:
    """Return ``True`` if a file called *name* is a coverage profile."""
    return not _is_hidden(name) and name.endswith(PROFILE_SUFFIX)


def has_vendor_segment(path: str | PurePath) -> bool:
    """Return ``True`` if any segment of *path* is a vendor directory."""
    return VENDOR_DIR in PurePath(path).parts


def in_skipped_directory(path: Path, base: Path) -> bool:
    """Return ``True`` if a directory between *base* and *path* would be pruned.

    Paths outside *base* are checked over all of their directory segments.
    """
    try:
        rel = path.resolve().relative_to(base.resolve())
    except ValueError:
        rel = Path(*path.parts[1:]) if path.is_absolute() else path
    return any(should_skip_directory(part) for part in rel.parent.parts if part not in {".", ".."})


class SkipMatcher:
    """Caller supplied skip rules, as gitwildmatch patterns.

    Paths are matched relative to *base* when they live below it and by their
    raw posix form otherwise. An empty matcher matches nothing.
    """

    def __init__(self, patterns: Sequence[str] = (), *, base: Path | None = None) -> None:
        self.patterns = tuple(p for p in (s.strip() for s in patterns) if p)
        self._base = (base or Path.cwd()).resolve()
        self._spec = PathSpec.from_lines("gitwildmatch", self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __repr__(self) -> str:
        return f"SkipMatcher({list(self.patterns)!r})"

    def with_base(self, base: Path) -> SkipMatcher:
        """Return the same patterns anchored at *base*."""
        return SkipMatcher(self.patterns, base=base)

    def _label(self, path: str | Path) -> str:
        p = Path(path)
        if not p.is_absolute():
            return p.as_posix()
        try:
            return p.relative_to(self._base).as_posix()
        except ValueError:
            return p.as_posix()

    def matches(self, path: str | Path, *, is_dir: bool = False) -> bool:
        if not self.patterns:
            return False
        label = self._label(path)
        if is_dir:
            label = label.rstrip("/") + "/"
        return self._spec.match_file(label)


__all__ = [
    "SkipMatcher",
    "has_vendor_segment",
    "in_skipped_directory",
    "is_candidate_profile_file",
    "is_candidate_source_directory",
    "should_skip_directory",
]
