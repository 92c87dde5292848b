"""Central configuration and constants for ``pkgcov``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from pkgcov._meta import logger
from pkgcov.core.types import FULL_COVERAGE, EmptyPackagePolicy
from pkgcov.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

# File suffix of statement coverage profiles.
PROFILE_SUFFIX = ".cov"

# Profile written by a single package's test run.
DEFAULT_PROFILE_NAME = "profile.cov"

# Directory holding test fixtures; never a package of its own.
FIXTURE_DIR = "testdata"

# Vendored dependency trees.
VENDOR_DIR = "vendor"

# Suffixes of buildable source files.
SOURCE_SUFFIXES: tuple[str, ...] = (".go",)

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

_TOOL_TABLE = "pkgcov"


def validate_threshold(value: Any) -> float:
    """Return *value* as a percentage or raise :class:`ConfigError`."""
    if isinstance(value, bool):
        msg = f"minimum coverage must be a number: {value!r}"
        raise ConfigError(msg)
    try:
        percent = float(value)
    except (TypeError, ValueError) as exc:
        msg = f"minimum coverage must be a number: {value!r}"
        raise ConfigError(msg) from exc
    if not 0 <= percent <= FULL_COVERAGE:
        msg = f"minimum coverage out of range (0..{FULL_COVERAGE}): {percent}"
        raise ConfigError(msg)
    return percent


def _validate_policy(value: Any) -> EmptyPackagePolicy:
    try:
        return EmptyPackagePolicy(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in EmptyPackagePolicy)
        msg = f"unknown empty package policy {value!r}; expected one of: {choices}"
        raise ConfigError(msg) from exc


def _validate_skip(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    msg = f"skip must be a string or a list of strings: {value!r}"
    raise ConfigError(msg)


def _validate_profile_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip() or "/" in value:
        msg = f"profile-name must be a plain file name: {value!r}"
        raise ConfigError(msg)
    return value.strip()


@dataclass(frozen=True, slots=True)
class Settings:
    """Effective run configuration.

    Fields
    ------
    min_coverage:
        Minimum coverage percentage (0..100) every package must reach.
    empty_policy:
        Verdict for packages that own no statements at all.
    skip:
        gitwildmatch patterns for paths to leave out of discovery.
    profile_name:
        File name looked up in single-directory mode.
    """

    min_coverage: float = 0.0
    empty_policy: EmptyPackagePolicy = EmptyPackagePolicy.PASS
    skip: tuple[str, ...] = field(default_factory=tuple)
    profile_name: str = DEFAULT_PROFILE_NAME

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_coverage", validate_threshold(self.min_coverage))
        object.__setattr__(self, "empty_policy", _validate_policy(self.empty_policy))
        object.__setattr__(self, "skip", tuple(self.skip))

    def merged(
        self,
        *,
        min_coverage: float | None = None,
        empty_policy: EmptyPackagePolicy | str | None = None,
        skip: tuple[str, ...] | list[str] | None = None,
    ) -> Settings:
        """Return a copy with the non-``None`` overrides applied."""
        changes: dict[str, Any] = {}
        if min_coverage is not None:
            changes["min_coverage"] = min_coverage
        if empty_policy is not None:
            changes["empty_policy"] = empty_policy
        if skip:
            changes["skip"] = (*self.skip, *skip)
        return replace(self, **changes) if changes else self


def find_project_root(start: Path) -> Path:
    """Heuristic project root finder: walks upward looking for pyproject.toml or .git."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / "pyproject.toml").exists():
            return p
        if (p / ".git").exists():
            return p
    return cur


def settings_from_mapping(table: dict[str, Any]) -> Settings:
    """Build :class:`Settings` from a ``[tool.pkgcov]`` table."""
    kwargs: dict[str, Any] = {}
    for key, value in table.items():
        if key == "min-coverage":
            kwargs["min_coverage"] = validate_threshold(value)
        elif key == "empty-packages":
            kwargs["empty_policy"] = _validate_policy(value)
        elif key == "skip":
            kwargs["skip"] = _validate_skip(value)
        elif key == "profile-name":
            kwargs["profile_name"] = _validate_profile_name(value)
        else:
            msg = f"unknown [tool.{_TOOL_TABLE}] key: {key!r}"
            raise ConfigError(msg)
    return Settings(**kwargs)


def load_settings(start: Path) -> Settings:
    """Load settings from the nearest ``pyproject.toml`` above *start*.

    A missing file or a file without a ``[tool.pkgcov]`` table yields the
    defaults. Unreadable or malformed files are configuration errors.
    """
    pp = find_project_root(start) / "pyproject.toml"
    if not pp.exists():
        return Settings()
    try:
        data = tomllib.loads(pp.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"failed to read {pp}: {exc}"
        raise ConfigError(msg) from exc
    except (tomllib.TOMLDecodeError, UnicodeError) as exc:
        msg = f"invalid TOML in {pp}: {exc}"
        raise ConfigError(msg) from exc

    table = data.get("tool", {}).get(_TOOL_TABLE)
    if table is None:
        return Settings()
    if not isinstance(table, dict):
        msg = f"[tool.{_TOOL_TABLE}] in {pp} must be a table"
        raise ConfigError(msg)
    logger.debug("loading settings from %s", pp)
    return settings_from_mapping(table)


__all__ = [
    "DEFAULT_PROFILE_NAME",
    "FIXTURE_DIR",
    "LOG_FORMAT",
    "PROFILE_SUFFIX",
    "SOURCE_SUFFIXES",
    "VENDOR_DIR",
    "Settings",
    "find_project_root",
    "load_settings",
    "settings_from_mapping",
    "validate_threshold",
]
