from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click.utils as click_utils
import typer

from pkgcov._meta import logger
from pkgcov.cli.exit_codes import EXIT_CONFIG
from pkgcov.core.config import LOG_FORMAT, Settings, load_settings
from pkgcov.errors import ConfigError

if TYPE_CHECKING:
    from pkgcov.core.report import ReportLine


def configure_logging(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)


def resolve_use_color(*, color: bool | None) -> bool:
    # An explicit flag takes precedence over terminal detection.
    if color is not None:
        return color
    stdout = sys.stdout
    try:
        is_tty = bool(getattr(stdout, "isatty", lambda: False)())
    except OSError:
        is_tty = False
    return is_tty and not click_utils.should_strip_ansi(stdout)


def load_settings_or_exit(start: Path) -> Settings:
    try:
        return load_settings(Path(start))
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc


def emit(lines: list[ReportLine], *, color: bool) -> None:
    """Write passing lines to stdout and failing lines to stderr."""
    for line in lines:
        typer.echo(line.text, err=line.failed, color=color)
