"""Centralised exception hierarchy for pkgcov."""

from __future__ import annotations


class PkgcovError(Exception):
    """Base class for all custom pkgcov exceptions."""


class ConfigError(PkgcovError):
    """Configuration value is missing, malformed or out of range."""


class WalkError(PkgcovError):
    """The base directory of a traversal could not be entered."""


class ProfileError(PkgcovError):
    """Base class for errors related to coverage profile handling."""


class ProfileNotFoundError(ProfileError):
    """Coverage profile could not be located on disk."""


class ProfileReadError(ProfileError):
    """Coverage profile exists but could not be read."""


class ProfileParseError(ProfileError):
    """A profile line does not match the statement record grammar."""

    def __init__(self, source: str, line_number: int, line: str) -> None:
        self.source = source
        self.line_number = line_number
        self.line = line
        super().__init__(f"{source}:{line_number}: malformed profile line: {line!r}")


class StatementCountMismatchError(ProfileError):
    """The same source range was recorded with different statement counts."""

    def __init__(
        self,
        key: tuple[str, int, int, int, int],
        *,
        expected: int,
        actual: int,
        source: str,
        line_number: int,
    ) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        self.source = source
        self.line_number = line_number
        file, start_line, start_col, end_line, end_col = key
        super().__init__(
            f"{source}:{line_number}: statement count mismatch for "
            f"{file}:{start_line}.{start_col},{end_line}.{end_col} "
            f"(expected {expected}, got {actual})"
        )


__all__ = [
    "ConfigError",
    "PkgcovError",
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileParseError",
    "ProfileReadError",
    "StatementCountMismatchError",
    "WalkError",
]
