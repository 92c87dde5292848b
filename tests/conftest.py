from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

ProfileLine = tuple[str, str, int, int]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def profile_content() -> Callable[..., str]:
    def build(lines: Iterable[ProfileLine], *, mode: str | None = "set") -> str:
        """Build profile text from ``(file, range, statements, hits)`` tuples."""
        out = [f"mode: {mode}"] if mode else []
        out.extend(f"{file}:{rng} {stmts} {hits}" for file, rng, stmts, hits in lines)
        return "\n".join(out) + "\n"

    return build


@pytest.fixture
def profile_file(tmp_path: Path, profile_content: Callable[..., str]) -> Callable[..., Path]:
    def write(
        lines: Iterable[ProfileLine],
        *,
        relpath: str = "profile.cov",
        mode: str | None = "set",
    ) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(profile_content(lines, mode=mode), encoding="utf-8")
        return path

    return write


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """Create empty files (and their directories) below ``tmp_path``."""

    def create(files: Iterable[str]) -> Path:
        for rel in files:
            p = tmp_path / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text("", encoding="utf-8")
        return tmp_path

    return create
