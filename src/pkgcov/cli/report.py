from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from pkgcov._meta import logger
from pkgcov.cli._shared import emit, load_settings_or_exit, resolve_use_color
from pkgcov.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_IOERR,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_THRESHOLD,
)
from pkgcov.core.pipeline import (
    ConfigurationError,
    DataError,
    NoInputError,
    SystemIOError,
    resolve_settings,
    run,
)
from pkgcov.core.report import render
from pkgcov.core.types import EmptyPackagePolicy, ReportFormat


def report_cmd(
    base: Annotated[
        Path,
        typer.Argument(help="Directory searched for *.cov profiles."),
    ] = Path(),
    single: Annotated[
        Path | None,
        typer.Option("-s", "--single", help="Only aggregate the profile.cov of this directory."),
    ] = None,
    profile: Annotated[
        list[Path] | None,
        typer.Option("-p", "--profile", help="Aggregate this profile file (repeatable)."),
    ] = None,
    min_coverage: Annotated[
        float | None,
        typer.Option("-m", "--min-coverage", help="Fail if any package is below this coverage %."),
    ] = None,
    skip: Annotated[
        list[str] | None,
        typer.Option("--skip", help="gitwildmatch pattern of paths to leave out (repeatable)."),
    ] = None,
    empty_packages: Annotated[
        EmptyPackagePolicy | None,
        typer.Option(
            "--empty-packages",
            help="Verdict for packages without statements.",
            case_sensitive=False,
        ),
    ] = None,
    fmt: Annotated[
        ReportFormat,
        typer.Option("--format", help="Report layout.", case_sensitive=False),
    ] = ReportFormat.PLAIN,
    color: Annotated[
        bool | None,
        typer.Option("--color/--no-color", help="Force or disable highlighting of failing packages."),
    ] = None,
) -> None:
    """Report per-package coverage and fail below the minimum."""
    settings = load_settings_or_exit(base)
    try:
        settings = resolve_settings(
            settings,
            min_coverage=min_coverage,
            empty_policy=empty_packages,
            skip=skip,
        )
    except ConfigurationError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc

    try:
        result = run(base_path=base, settings=settings, single=single, profiles=tuple(profile or ()))
    except NoInputError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT) from exc
    except DataError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    except SystemIOError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_IOERR) from exc

    use_color = resolve_use_color(color=color)
    emit(render(result, fmt=fmt, color=use_color), color=use_color)

    if not result.passed:
        logger.debug("%d package(s) below %.2f%%", len(result.failures), settings.min_coverage)
        raise typer.Exit(code=EXIT_THRESHOLD)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("report")(report_cmd)


__all__ = ["register"]
