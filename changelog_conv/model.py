"""
model.py

Responsibility: the in-memory changelog both parsers build and the formatter reads.

A `Changelog` maps each `Version` to exactly one `Release`. Models are built
fresh by every parse call; nothing here touches files or streams.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from changelog_conv.errors import DuplicateReleaseError
from changelog_conv.version import Version

# Date used when none is known.
ZERO_DATE = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Change:
    """One change, usually one line in a changelog."""

    type: str = ""  # "Added", "Fixed", etc.
    body: str = ""


@dataclass(frozen=True)
class Maintainer:
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class Release:
    """
    A single release. Empty `urgency` and `distribution` mean "not given";
    the Debian formatter substitutes its defaults for them.
    """

    date: datetime = ZERO_DATE
    changes: list[Change] = field(default_factory=list)
    urgency: str = ""
    distribution: str = ""
    maintainer: Maintainer = field(default_factory=Maintainer)


class Changelog(dict[Version, Release]):
    """Mapping of version to release. A version can be added only once."""

    def add(self, version: Version, release: Release) -> None:
        if version in self:
            raise DuplicateReleaseError(str(version))
        self[version] = release

    def sorted_versions(self) -> list[Version]:
        """
        Versions ordered oldest-first: by release date, then by version.
        Equal keys keep insertion order.
        """
        return sorted(self, key=lambda v: (to_aware(self[v].date), v))

    def with_maintainer(self, maintainer: Maintainer) -> Changelog:
        out = Changelog()
        for version, release in self.items():
            out[version] = replace(release, maintainer=maintainer, changes=list(release.changes))
        return out


def to_aware(d: datetime) -> datetime:
    # Naive dates are taken as UTC so they compare with parsed Debian dates.
    return d if d.tzinfo is not None else d.replace(tzinfo=timezone.utc)
