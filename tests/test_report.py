from __future__ import annotations

import pytest

from pkgcov.core.aggregate import CoverageNode, CoverageReport, aggregate
from pkgcov.core.profile import StatementRecord
from pkgcov.core.report import (
    FAIL_MARKER,
    PLAIN_HEADER,
    PackageRow,
    ReportLine,
    evaluate,
    render,
)
from pkgcov.core.types import EmptyPackagePolicy, ReportFormat


@pytest.fixture
def scenario_report() -> CoverageReport:
    return aggregate([
        StatementRecord("pkg/sub/b.go", 1, 1, 2, 1, 2, 1),
        StatementRecord("pkg/a.go", 1, 1, 2, 1, 1, 1),
        StatementRecord("pkg/a.go", 3, 1, 4, 1, 3, 0),
    ])


def test_percentages_include_descendants(scenario_report: CoverageReport) -> None:
    result = evaluate(scenario_report, 0)
    assert result.rows == (
        PackageRow(package="pkg", percent=50.0, statements=6, passed=True),
        PackageRow(package="pkg/sub", percent=100.0, statements=2, passed=True),
    )
    assert result.passed


def test_package_below_threshold_fails_the_run(scenario_report: CoverageReport) -> None:
    result = evaluate(scenario_report, 80)
    assert not result.passed
    assert [r.package for r in result.failures] == ["pkg"]

    lines = render(result, color=False)
    failed = [ln for ln in lines if ln.failed]
    assert failed == [ReportLine(f"50.00\t\t    6\t\tpkg\t{FAIL_MARKER}", failed=True)]


def test_threshold_boundary_passes(scenario_report: CoverageReport) -> None:
    assert evaluate(scenario_report, 50).passed
    assert not evaluate(scenario_report, 50.01).passed


def test_plain_render_layout(scenario_report: CoverageReport) -> None:
    lines = render(evaluate(scenario_report, 0))
    assert [ln.text for ln in lines] == [
        PLAIN_HEADER,
        "50.00\t\t    6\t\tpkg",
        "100.00\t\t    2\t\tpkg/sub",
        "",
    ]
    assert not any(ln.failed for ln in lines)


def test_plain_render_highlights_failures(scenario_report: CoverageReport) -> None:
    lines = render(evaluate(scenario_report, 80), color=True)
    (failed,) = [ln for ln in lines if ln.failed]
    assert failed.text == "\x1b[1;31m50.00\t\t    6\t\tpkg\x1b[0m"


def test_render_is_deterministic(scenario_report: CoverageReport) -> None:
    first = render(evaluate(scenario_report, 60), fmt=ReportFormat.TABLE)
    second = render(evaluate(scenario_report, 60), fmt=ReportFormat.TABLE)
    assert first == second


def test_table_render_routes_failures(scenario_report: CoverageReport) -> None:
    lines = render(evaluate(scenario_report, 80), fmt=ReportFormat.TABLE, color=False)
    text = "\n".join(ln.text for ln in lines if not ln.failed)
    assert "pkg/sub" in text
    assert "100.00" in text
    assert "\x1b[" not in text
    failed = [ln.text for ln in lines if ln.failed]
    assert failed == [f"{FAIL_MARKER} pkg: 50.00% < 80.00%"]


@pytest.mark.parametrize(
    ("policy", "expected"),
    [
        (EmptyPackagePolicy.PASS, (PackageRow("empty", 100.0, 0, passed=True),)),
        (EmptyPackagePolicy.FAIL, (PackageRow("empty", 0.0, 0, passed=False),)),
        (EmptyPackagePolicy.EXCLUDE, ()),
    ],
)
def test_empty_package_policy(policy: EmptyPackagePolicy, expected: tuple[PackageRow, ...]) -> None:
    report = CoverageReport({"empty": CoverageNode()})
    result = evaluate(report, 10, empty_policy=policy)
    assert result.rows == expected
    assert result.passed is all(r.passed for r in expected)


def test_empty_report_passes() -> None:
    result = evaluate(CoverageReport(), 100)
    assert result.passed
    assert result.rows == ()
    assert [ln.text for ln in render(result)] == [PLAIN_HEADER, ""]
