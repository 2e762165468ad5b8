"""
errors.py

Responsibility: every exception the library raises.

Parsers record per-line problems as instances of the specific classes below and
report them together through `ParseError`, so callers can inspect both the
partial result and the individual error kinds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_conv.model import Changelog


class ChangelogError(Exception):
    """Base exception for all application-specific errors."""


class NotSemverError(ChangelogError, ValueError):
    """Raised when a string is not a valid semantic version."""

    def __init__(self, value: str) -> None:
        super().__init__(f"not semver: {value!r}")
        self.value = value


class DuplicateReleaseError(ChangelogError):
    """Raised when a changelog already holds a release for a version."""

    def __init__(self, version: str) -> None:
        super().__init__(f"multiple releases for {version}")
        self.version = version


class MalformedTrailerError(ChangelogError):
    """Raised when the maintainer/date line of a Debian block can't be parsed."""

    def __init__(self, version: str, reason: str) -> None:
        super().__init__(f"{reason} for {version}")
        self.version = version
        self.reason = reason


class EncodingError(ChangelogError):
    """Raised when byte input is not valid UTF-8."""

    def __init__(self, lineno: int, reason: str) -> None:
        super().__init__(f"line {lineno} is not valid UTF-8: {reason}")
        self.lineno = lineno


class ParseError(ChangelogError):
    """
    Raised by the parsers once the whole stream has been consumed, if any
    line-level error was recorded. `changelog` holds everything that could
    still be built; `errors` lists the recorded errors in input order.
    """

    def __init__(self, changelog: Changelog, errors: list[ChangelogError]) -> None:
        super().__init__(str(errors[-1]))
        self.changelog = changelog
        self.errors = list(errors)


class FormatError(ChangelogError, ValueError):
    pass


class ConfigError(ChangelogError, ValueError):
    pass
