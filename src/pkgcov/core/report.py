"""Threshold evaluation and rendering of per-package coverage."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style
from rich.table import Table

from pkgcov.core.metrics import pct
from pkgcov.core.types import EmptyPackagePolicy, ReportFormat

if TYPE_CHECKING:
    from pkgcov.core.aggregate import CoverageReport
    from pkgcov.core.types import PackageKey

PLAIN_HEADER = "  %\t\tStatements\tPackage"
FAIL_MARKER = "FAIL"
_FAIL_STYLE = Style(bold=True, color="red")


@dataclass(frozen=True, slots=True)
class PackageRow:
    """Effective coverage of one package, descendants included."""

    package: PackageKey
    percent: float
    statements: int
    passed: bool


@dataclass(frozen=True, slots=True)
class ThresholdReport:
    """Outcome of comparing every package against the minimum coverage."""

    rows: tuple[PackageRow, ...]
    min_coverage: float
    passed: bool

    @property
    def failures(self) -> tuple[PackageRow, ...]:
        return tuple(r for r in self.rows if not r.passed)


@dataclass(frozen=True, slots=True)
class ReportLine:
    """One rendered line; failed lines belong on the error stream."""

    text: str
    failed: bool = False


def evaluate(
    report: CoverageReport,
    min_coverage: float,
    *,
    empty_policy: EmptyPackagePolicy = EmptyPackagePolicy.PASS,
) -> ThresholdReport:
    """Judge every package of *report* against *min_coverage*.

    Packages without statements follow *empty_policy*. The overall verdict
    passes only if every reported package does; an empty report passes.
    """
    rows: list[PackageRow] = []
    for key, node in report.items():
        total = node.total_statements
        if total == 0:
            if empty_policy is EmptyPackagePolicy.EXCLUDE:
                continue
            percent = pct(0, 0, full=0.0 if empty_policy is EmptyPackagePolicy.FAIL else 100.0)
            passed = empty_policy is EmptyPackagePolicy.PASS
        else:
            percent = pct(node.total_covered, total)
            passed = percent >= min_coverage
        rows.append(PackageRow(package=key, percent=percent, statements=total, passed=passed))

    return ThresholdReport(
        rows=tuple(rows),
        min_coverage=min_coverage,
        passed=all(r.passed for r in rows),
    )


def _plain_row(row: PackageRow) -> str:
    return f"{row.percent:2.2f}\t\t{row.statements:5d}\t\t{row.package}"


def _render_plain(result: ThresholdReport, *, color: bool) -> list[ReportLine]:
    lines = [ReportLine(PLAIN_HEADER)]
    for row in result.rows:
        text = _plain_row(row)
        if row.passed:
            lines.append(ReportLine(text))
        elif color:
            lines.append(ReportLine(_FAIL_STYLE.render(text, color_system=ColorSystem.STANDARD), failed=True))
        else:
            lines.append(ReportLine(f"{text}\t{FAIL_MARKER}", failed=True))
    lines.append(ReportLine(""))
    return lines


def _render_table(result: ThresholdReport, *, color: bool) -> list[ReportLine]:
    table = Table(
        title=f"Package Coverage (minimum {result.min_coverage:.2f}%)",
        box=box.SIMPLE_HEAVY,
        header_style="bold",
    )
    table.add_column("%", justify="right")
    table.add_column("Statements", justify="right")
    table.add_column("Package", overflow="fold")
    table.add_column("Status")

    for row in result.rows:
        status = "ok" if row.passed else FAIL_MARKER
        table.add_row(
            f"{row.percent:.2f}",
            str(row.statements),
            row.package,
            status,
            style=None if row.passed else "red",
        )

    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        width=200,
    )
    console.print(table)
    lines = [ReportLine(text) for text in buf.getvalue().rstrip().splitlines()]
    lines.extend(
        ReportLine(f"{FAIL_MARKER} {r.package}: {r.percent:.2f}% < {result.min_coverage:.2f}%", failed=True)
        for r in result.failures
    )
    lines.append(ReportLine(""))
    return lines


def render(
    result: ThresholdReport,
    *,
    fmt: ReportFormat = ReportFormat.PLAIN,
    color: bool = False,
) -> list[ReportLine]:
    """Render *result* as lines in sorted package order."""
    if fmt is ReportFormat.TABLE:
        return _render_table(result, color=color)
    return _render_plain(result, color=color)


__all__ = [
    "FAIL_MARKER",
    "PLAIN_HEADER",
    "PackageRow",
    "ReportLine",
    "ThresholdReport",
    "evaluate",
    "render",
]
