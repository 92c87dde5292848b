"""Parsing and merging of statement coverage profiles.

A profile is plain text. Each file starts with a mode marker (``mode: set``,
``mode: count`` or ``mode: atomic``); marker lines are ignored wherever they
appear, so concatenated profiles parse as one. Every other non-blank line
records one source range::

    <file>:<startLine>.<startCol>,<endLine>.<endCol> <numStatements> <hitCount>
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from pkgcov._meta import logger
from pkgcov.errors import (
    ProfileNotFoundError,
    ProfileParseError,
    ProfileReadError,
    StatementCountMismatchError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pkgcov.core.types import RecordKey

_MODE_RE = re.compile(r"^mode:\s*\S+\s*$")
_LINE_RE = re.compile(
    r"^(?P<file>.+):(?P<sl>\d+)\.(?P<sc>\d+),(?P<el>\d+)\.(?P<ec>\d+) (?P<stmts>\d+) (?P<hits>\d+)$"
)


@dataclass(frozen=True, slots=True)
class StatementRecord:
    """One source range with its statement count and execution count."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    statements: int
    hits: int

    @property
    def key(self) -> RecordKey:
        return (self.file, self.start_line, self.start_col, self.end_line, self.end_col)

    @property
    def covered(self) -> bool:
        return self.hits > 0


@dataclass(frozen=True, slots=True)
class _Located:
    record: StatementRecord
    source: str
    line_number: int


def _iter_located(text: str, source: str) -> Iterable[_Located]:
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or _MODE_RE.match(line):
            continue
        m = _LINE_RE.match(line)
        if not m:
            raise ProfileParseError(source, number, raw)
        record = StatementRecord(
            file=m.group("file"),
            start_line=int(m.group("sl")),
            start_col=int(m.group("sc")),
            end_line=int(m.group("el")),
            end_col=int(m.group("ec")),
            statements=int(m.group("stmts")),
            hits=int(m.group("hits")),
        )
        yield _Located(record, source, number)


def parse_profile(text: str, *, source: str = "<memory>") -> list[StatementRecord]:
    """Return the records of one profile in file order, unmerged."""
    return [loc.record for loc in _iter_located(text, source)]


def _merge(located: Iterable[_Located]) -> tuple[StatementRecord, ...]:
    merged: dict[RecordKey, StatementRecord] = {}
    for loc in located:
        rec = loc.record
        prev = merged.get(rec.key)
        if prev is None:
            merged[rec.key] = rec
            continue
        if prev.statements != rec.statements:
            raise StatementCountMismatchError(
                rec.key,
                expected=prev.statements,
                actual=rec.statements,
                source=loc.source,
                line_number=loc.line_number,
            )
        merged[rec.key] = replace(prev, hits=prev.hits + rec.hits)
    return tuple(merged[k] for k in sorted(merged))


def merge_records(records: Iterable[StatementRecord]) -> tuple[StatementRecord, ...]:
    """Merge records sharing a key by summing their hit counts."""
    return _merge(_Located(rec, "<records>", index) for index, rec in enumerate(records, start=1))


def parse_profiles(sources: Iterable[tuple[str, str]]) -> tuple[StatementRecord, ...]:
    """Parse ``(source_name, text)`` pairs and merge every record they hold.

    The first malformed line or statement count conflict aborts parsing.
    """

    def located() -> Iterable[_Located]:
        for source, text in sources:
            count = 0
            for loc in _iter_located(text, source):
                count += 1
                yield loc
            logger.debug("parsed %d records from %s", count, source)

    return _merge(located())


def read_profiles(paths: Iterable[Path]) -> list[tuple[str, str]]:
    """Return ``(path, text)`` pairs for *paths*, failing on the first unreadable file."""
    out: list[tuple[str, str]] = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            msg = f"coverage profile not found: {path}"
            raise ProfileNotFoundError(msg) from exc
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to read coverage profile {path}: {exc}"
            raise ProfileReadError(msg) from exc
        out.append((str(path), text))
    return out


__all__ = [
    "StatementRecord",
    "merge_records",
    "parse_profile",
    "parse_profiles",
    "read_profiles",
]
