from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from pkgcov.cli._shared import load_settings_or_exit
from pkgcov.cli.exit_codes import EXIT_NOINPUT, EXIT_OK
from pkgcov.core.path_filter import SkipMatcher
from pkgcov.core.walker import find_source_directories
from pkgcov.errors import WalkError


def register(app: typer.Typer) -> None:
    @app.command("dirs")
    def dirs(
        base: Annotated[
            Path,
            typer.Argument(help="Directory searched for packages."),
        ] = Path(),
        skip: Annotated[
            list[str] | None,
            typer.Option("--skip", help="gitwildmatch pattern of paths to leave out (repeatable)."),
        ] = None,
    ) -> None:
        """List every directory holding buildable sources, one per line."""
        settings = load_settings_or_exit(base)
        matcher = SkipMatcher((*settings.skip, *(skip or ())), base=base)
        try:
            found = find_source_directories(base, skip=matcher)
        except WalkError as exc:
            typer.echo(f"ERROR: {exc}", err=True)
            raise typer.Exit(code=EXIT_NOINPUT) from exc
        for path in found:
            typer.echo(f"{path}/")
        raise typer.Exit(code=EXIT_OK)


__all__ = ["register"]
