"""Depth-first discovery of source directories and coverage profiles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pkgcov._meta import logger
from pkgcov.core.config import SOURCE_SUFFIXES
from pkgcov.core.path_filter import (
    SkipMatcher,
    has_vendor_segment,
    is_candidate_profile_file,
    is_candidate_source_directory,
    should_skip_directory,
)
from pkgcov.core.types import WalkMode
from pkgcov.errors import WalkError

if TYPE_CHECKING:
    from collections.abc import Sequence


def _resolve_base(base_path: str | Path) -> Path:
    base = Path(base_path)
    try:
        resolved = base.resolve(strict=True)
    except OSError as exc:
        msg = f"cannot enter base directory '{base}': {exc}"
        raise WalkError(msg) from exc
    if not resolved.is_dir():
        msg = f"cannot enter base directory '{base}': not a directory"
        raise WalkError(msg)
    return resolved


def _log_walk_error(exc: OSError) -> None:
    logger.warning("failed to check path '%s' with error %s", exc.filename, exc)


def walk(
    base_path: str | Path,
    mode: WalkMode,
    *,
    skip: SkipMatcher | None = None,
    source_suffixes: Sequence[str] = SOURCE_SUFFIXES,
) -> list[Path]:
    """Return the absolute paths below *base_path* collected for *mode*.

    Pruned directories are never entered. Unreadable entries are logged and
    skipped. Paths are resolved against the base, the process working
    directory is left untouched. The result is sorted.
    """
    base = _resolve_base(base_path)
    matcher = skip.with_base(base) if skip else None
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(base, topdown=True, onerror=_log_walk_error):
        current = Path(dirpath)

        kept: list[str] = []
        for name in sorted(dirnames):
            if should_skip_directory(name):
                logger.debug("pruning '%s'", current / name)
                continue
            if matcher is not None and matcher.matches(current / name, is_dir=True):
                logger.debug("pruning '%s' due to skip patterns %s", current / name, matcher.patterns)
                continue
            kept.append(name)
        dirnames[:] = kept

        if mode is WalkMode.SOURCE_DIRECTORIES:
            if is_candidate_source_directory(current, source_suffixes):
                found.append(current)
            continue

        for name in filenames:
            if not is_candidate_profile_file(name):
                continue
            path = current / name
            if matcher is not None and matcher.matches(path):
                logger.debug("skipping '%s' due to skip patterns %s", path, matcher.patterns)
                continue
            found.append(path)

    result: list[Path] = []
    for path in found:
        if has_vendor_segment(path):
            logger.debug("skipping '%s' due to /vendor/", path)
            continue
        result.append(path)
    return sorted(result)


def find_source_directories(
    base_path: str | Path,
    *,
    skip: SkipMatcher | None = None,
    source_suffixes: Sequence[str] = SOURCE_SUFFIXES,
) -> list[Path]:
    """Return every directory below *base_path* holding buildable sources.

    Directories come back as :class:`~pathlib.Path` objects, which carry no
    trailing separator; append ``/`` when printing them (``pkgcov dirs`` does).
    """
    return walk(base_path, WalkMode.SOURCE_DIRECTORIES, skip=skip, source_suffixes=source_suffixes)


def find_profile_files(base_path: str | Path, *, skip: SkipMatcher | None = None) -> list[Path]:
    """Return every coverage profile below *base_path*."""
    return walk(base_path, WalkMode.PROFILE_FILES, skip=skip)


__all__ = ["find_profile_files", "find_source_directories", "walk"]
