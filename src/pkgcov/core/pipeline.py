from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pkgcov._meta import logger
from pkgcov.core.aggregate import aggregate
from pkgcov.core.path_filter import SkipMatcher, has_vendor_segment, in_skipped_directory
from pkgcov.core.profile import parse_profiles, read_profiles
from pkgcov.core.report import ThresholdReport, evaluate
from pkgcov.core.walker import find_profile_files
from pkgcov.errors import (
    ConfigError,
    ProfileNotFoundError,
    ProfileParseError,
    ProfileReadError,
    StatementCountMismatchError,
    WalkError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pkgcov.core.aggregate import CoverageReport
    from pkgcov.core.config import Settings


class PipelineError(Exception):
    """Base class for errors emitted by the pipeline."""


class NoInputError(PipelineError):
    """A profile or base directory was missing."""


class DataError(PipelineError):
    """Profile data is malformed or inconsistent."""


class SystemIOError(PipelineError):
    """Filesystem IO error while reading profiles."""


class ConfigurationError(PipelineError):
    """Settings were rejected before any work started."""


def single_profile_path(directory: Path, settings: Settings) -> Path:
    """Return the profile a single package's test run writes into *directory*."""
    return (directory / settings.profile_name).resolve()


def collect_profile_paths(
    *,
    base_path: Path,
    settings: Settings,
    single: Path | None = None,
    profiles: Sequence[Path] = (),
) -> list[Path]:
    """Resolve the profile set for one run.

    Explicit *profiles* win, then the *single* directory's profile, then every
    profile discovered below *base_path*. Explicit paths are still subject to
    the skip patterns, the vendor rule and the directory exclusions.
    """
    matcher = SkipMatcher(settings.skip, base=base_path)
    try:
        if profiles or single is not None:
            explicit = [p.resolve() for p in profiles] or [single_profile_path(single, settings)]
            paths: list[Path] = []
            for p in explicit:
                if matcher.matches(p):
                    logger.debug("coverage for '%s' skipped due to skip patterns %s", p, matcher.patterns)
                    continue
                if has_vendor_segment(p):
                    logger.debug("skipping '%s' due to /vendor/", p)
                    continue
                if in_skipped_directory(p, base_path):
                    logger.debug("skipping '%s' below a hidden or excluded directory", p)
                    continue
                paths.append(p)
            return paths
        return find_profile_files(base_path, skip=matcher)
    except WalkError as exc:
        raise NoInputError(str(exc)) from exc


def build_coverage_report(paths: Sequence[Path]) -> CoverageReport:
    """Read, parse and aggregate *paths* into a :class:`CoverageReport`."""
    if not paths:
        logger.warning("no coverage profiles found")
    try:
        sources = read_profiles(paths)
        records = parse_profiles(sources)
    except ProfileNotFoundError as exc:
        raise NoInputError(str(exc)) from exc
    except (ProfileParseError, StatementCountMismatchError) as exc:
        raise DataError(str(exc)) from exc
    except ProfileReadError as exc:
        raise SystemIOError(str(exc)) from exc
    logger.info("merged %d statement records from %d profile(s)", len(records), len(paths))
    return aggregate(records)


def run(
    *,
    base_path: Path,
    settings: Settings,
    single: Path | None = None,
    profiles: Sequence[Path] = (),
) -> ThresholdReport:
    """Discover, parse, aggregate and judge coverage in one call."""
    base = Path(base_path)
    paths = collect_profile_paths(base_path=base, settings=settings, single=single, profiles=profiles)
    report = build_coverage_report(paths)
    return evaluate(report, settings.min_coverage, empty_policy=settings.empty_policy)


def resolve_settings(
    settings: Settings,
    *,
    min_coverage: float | None = None,
    empty_policy: str | None = None,
    skip: Sequence[str] | None = None,
) -> Settings:
    """Apply command line overrides, translating rejections for the CLI."""
    try:
        return settings.merged(
            min_coverage=min_coverage,
            empty_policy=empty_policy,
            skip=list(skip or ()),
        )
    except ConfigError as exc:
        raise ConfigurationError(str(exc)) from exc


__all__ = [
    "ConfigurationError",
    "DataError",
    "NoInputError",
    "PipelineError",
    "SystemIOError",
    "build_coverage_report",
    "collect_profile_paths",
    "resolve_settings",
    "run",
    "single_profile_path",
]
