"""
version.py

Responsibility: recognize semantic version strings and order them.

Ordering compares major, minor and patch numerically. For equal cores a
prerelease sorts before the final release, and two prereleases are compared
as plain strings ("rc10" < "rc2"). Numeric prerelease identifiers are
deliberately not compared numerically.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from changelog_conv.errors import NotSemverError

# Unanchored: used to find a version anywhere in a line.
SEMVER_PATTERN = re.compile(
    r"(?P<major>0|[1-9]\d*)\."
    r"(?P<minor>0|[1-9]\d*)\."
    r"(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version. Build metadata is never kept."""

    major: int
    minor: int
    patch: int
    prerelease: str = ""

    def _key(self) -> tuple[int, int, int, bool, str]:
        return (self.major, self.minor, self.patch, not self.prerelease, self.prerelease)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{self.prerelease}"
        return core


def find_version(text: str) -> str:
    """
    Return the first substring of `text` matching the version grammar, or "".
    """
    m = SEMVER_PATTERN.search(text)
    return m.group(0) if m else ""


def parse_version(s: str) -> Version:
    """
    Convert `s` to a Version. The whole string must match the grammar: no
    "v" prefix and no surrounding text.

    Raises NotSemverError otherwise.
    """
    m = SEMVER_PATTERN.fullmatch(s)
    if m is None:
        raise NotSemverError(s)
    return Version(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        prerelease=m.group("prerelease") or "",
    )
