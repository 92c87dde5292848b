from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pkgcov.core.aggregate import aggregate
from pkgcov.core.config import Settings
from pkgcov.core.pipeline import (
    ConfigurationError,
    DataError,
    NoInputError,
    build_coverage_report,
    collect_profile_paths,
    resolve_settings,
    run,
)
from pkgcov.core.profile import parse_profiles
from pkgcov.core.report import evaluate, render

BASE_LINES = [
    ("pkg/a.go", "1.1,2.2", 4, 1),
    ("pkg/a.go", "3.1,4.2", 4, 0),
    ("pkg/sub/b.go", "1.1,2.2", 2, 0),
]


def test_run_over_discovered_profiles(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    profile_file(BASE_LINES, relpath="pkg/profile.cov")
    profile_file([("pkg/sub/b.go", "1.1,2.2", 2, 3)], relpath="pkg/sub/profile.cov")

    result = run(base_path=tmp_path, settings=Settings(min_coverage=60))

    assert [(r.package, r.percent, r.statements) for r in result.rows] == [
        ("pkg", 60.0, 10),
        ("pkg/sub", 100.0, 2),
    ]
    assert result.passed


def test_single_directory_mode(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    profile_file(BASE_LINES, relpath="pkg/profile.cov")
    profile_file([("other/c.go", "1.1,2.2", 1, 0)], relpath="other/profile.cov")

    paths = collect_profile_paths(base_path=tmp_path, settings=Settings(), single=tmp_path / "pkg")

    assert paths == [(tmp_path / "pkg" / "profile.cov").resolve()]


def test_explicit_profiles_respect_skip_and_vendor(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    keep = profile_file(BASE_LINES, relpath="keep.cov")
    gen = profile_file(BASE_LINES, relpath="gen/x.cov")
    vendored = profile_file(BASE_LINES, relpath="vendor/lib/x.cov")

    paths = collect_profile_paths(
        base_path=tmp_path,
        settings=Settings(skip=("gen/",)),
        profiles=[keep, gen, vendored],
    )

    assert paths == [keep.resolve()]


def test_vendor_profile_never_contributes(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    profile_file(BASE_LINES, relpath="pkg/profile.cov")
    profile_file([("vendor/thirdparty/x.go", "1.1,2.2", 9, 0)], relpath="vendor/thirdparty/profile.cov")

    result = run(base_path=tmp_path, settings=Settings())

    assert all("vendor" not in r.package for r in result.rows)


def test_empty_base_passes(tmp_path: Path) -> None:
    result = run(base_path=tmp_path, settings=Settings(min_coverage=100))
    assert result.passed
    assert result.rows == ()


def test_missing_base_is_no_input(tmp_path: Path) -> None:
    with pytest.raises(NoInputError):
        run(base_path=tmp_path / "missing", settings=Settings())


def test_missing_single_profile_is_no_input(tmp_path: Path) -> None:
    with pytest.raises(NoInputError, match="not found"):
        run(base_path=tmp_path, settings=Settings(), single=tmp_path)


def test_malformed_profile_aborts(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    good = profile_file(BASE_LINES, relpath="a.cov")
    bad = tmp_path / "b.cov"
    bad.write_text("mode: set\npkg/a.go:1.1 2 3\n", encoding="utf-8")

    with pytest.raises(DataError, match=r"b\.cov:2"):
        build_coverage_report([good, bad])


def test_resolve_settings_rejects_bad_threshold() -> None:
    with pytest.raises(ConfigurationError, match="out of range"):
        resolve_settings(Settings(), min_coverage=101)


def test_merging_identical_profiles_keeps_ratios(profile_content: Callable[..., str]) -> None:
    text = profile_content(BASE_LINES)
    once = evaluate(aggregate(parse_profiles([("a", text)])), 0)
    twice = evaluate(aggregate(parse_profiles([("a", text), ("b", text)])), 0)
    assert [(r.package, r.percent, r.statements) for r in once.rows] == [
        (r.package, r.percent, r.statements) for r in twice.rows
    ]


def test_merging_more_profiles_never_lowers_coverage(profile_content: Callable[..., str]) -> None:
    runs = [
        profile_content(BASE_LINES),
        profile_content([("pkg/a.go", "3.1,4.2", 4, 2)]),
        profile_content([("pkg/sub/b.go", "1.1,2.2", 2, 1)]),
        profile_content([("pkg/a.go", "1.1,2.2", 4, 0)]),
    ]
    previous: dict[str, float] = {}
    for n in range(1, len(runs) + 1):
        sources = [(f"run{i}", t) for i, t in enumerate(runs[:n])]
        result = evaluate(aggregate(parse_profiles(sources)), 0)
        current = {r.package: r.percent for r in result.rows}
        for pkg, percent in previous.items():
            assert current[pkg] >= percent
        previous = current
    assert previous == {"pkg": 100.0, "pkg/sub": 100.0}


def test_output_is_deterministic(profile_file: Callable[..., Path], tmp_path: Path) -> None:
    profile_file(BASE_LINES, relpath="z/profile.cov")
    profile_file([("alpha/x.go", "1.1,2.2", 3, 1)], relpath="a/profile.cov")

    outputs = [
        [ln.text for ln in render(run(base_path=tmp_path, settings=Settings(min_coverage=50)))]
        for _ in range(2)
    ]

    assert outputs[0] == outputs[1]
    assert outputs[0][1].endswith("alpha")


def test_explicit_profiles_below_hidden_directories_are_ignored(
    profile_file: Callable[..., Path], tmp_path: Path
) -> None:
    hidden = profile_file(BASE_LINES, relpath=".cache/x.cov")
    underscored = profile_file(BASE_LINES, relpath="_tools/y.cov")
    fixture = profile_file(BASE_LINES, relpath="pkg/testdata/z.cov")

    paths = collect_profile_paths(
        base_path=tmp_path,
        settings=Settings(),
        profiles=[hidden, underscored, fixture],
    )

    assert paths == []
    assert collect_profile_paths(base_path=tmp_path, settings=Settings(), single=tmp_path / "_tools") == []
