from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from pkgcov import __version__
from pkgcov.cli import dirs, report
from pkgcov.cli._shared import configure_logging


def _show_version(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"pkgcov {__version__}")
        raise typer.Exit


def create_app() -> typer.Typer:
    app = typer.Typer(help="Per-package statement coverage with sub-package rollup.")

    @app.callback()
    def _root(
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit", callback=_show_version, is_eager=True),
        ] = False,
        verbose: Annotated[
            bool,
            typer.Option("-v", "--verbose", help="Emit diagnostic logging"),
        ] = False,
        quiet: Annotated[
            bool,
            typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors"),
        ] = False,
    ) -> None:
        configure_logging(quiet=quiet, verbose=verbose)

    report.register(app)
    dirs.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
