"""Shared type aliases and enumerations used across pkgcov."""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Common type aliases
# ---------------------------------------------------------------------------

PackageKey: TypeAlias = str
"""Slash separated import path of a package, e.g. ``example.com/app/sub``."""

RecordKey: TypeAlias = tuple[str, int, int, int, int]
"""``(file, start_line, start_col, end_line, end_col)`` identity of a statement range."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class WalkMode(StrEnum):
    """What the tree walker collects."""

    SOURCE_DIRECTORIES = "source-directories"
    PROFILE_FILES = "profile-files"


class EmptyPackagePolicy(StrEnum):
    """How packages without any statements are judged."""

    PASS = "pass"  # reported at 100%
    FAIL = "fail"  # reported at 0%
    EXCLUDE = "exclude"  # left out of the report and the verdict


class ReportFormat(StrEnum):
    """Supported report layouts."""

    PLAIN = "plain"
    TABLE = "table"


FULL_COVERAGE: int = 100


__all__ = [
    "FULL_COVERAGE",
    "EmptyPackagePolicy",
    "PackageKey",
    "RecordKey",
    "ReportFormat",
    "WalkMode",
]
