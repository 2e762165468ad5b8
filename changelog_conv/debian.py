"""
debian.py

Responsibility: read and write Debian changelogs.

A Debian changelog is a sequence of blocks:

    package (1.2.3) stable; urgency=medium

      * Fixed: something

     -- John Doe <john@doe.me>  Sat, 13 Jul 2019 00:00:00 +0000

`parse_debian` builds a `Changelog` from such text; `format_debian` renders a
`Changelog` back into it through the `debian.changelog.j2` template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from email.utils import format_datetime, parsedate_to_datetime

from jinja2 import Environment, PackageLoader, StrictUndefined

from changelog_conv.errors import (
    ChangelogError,
    DuplicateReleaseError,
    FormatError,
    MalformedTrailerError,
    NotSemverError,
    ParseError,
)
from changelog_conv.model import Change, Changelog, Maintainer, Release, to_aware
from changelog_conv.reader import Source, iter_lines
from changelog_conv.version import Version, find_version, parse_version

logger = logging.getLogger(__name__)

CHANGE_PREFIX = "  * "
TRAILER_PREFIX = " -- "

DEFAULT_URGENCY = "medium"
DEFAULT_DISTRIBUTION = "stable"

TEMPLATE_NAME = "debian.changelog.j2"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@dataclass
class _Block:
    """A release whose trailer line hasn't been seen yet."""

    version: Version
    ver_string: str
    urgency: str = ""
    distribution: str = ""
    changes: list[Change] = field(default_factory=list)


def _parse_header(line: str) -> _Block | None:
    ver_string = find_version(line)
    try:
        version = parse_version(ver_string)
    except NotSemverError:
        return None

    block = _Block(version=version, ver_string=ver_string)
    for comp in line.split(" "):
        if comp.endswith(";"):
            block.distribution = comp[:-1]
        elif comp.startswith("urgency="):
            block.urgency = comp[len("urgency=") :]
    return block


def _parse_change(line: str) -> Change:
    text = line[len(CHANGE_PREFIX) :]
    type_, sep, body = text.partition(": ")
    if not sep:
        return Change(body=text)
    return Change(type=type_, body=body)


def _parse_trailer(line: str, ver_string: str) -> tuple[Maintainer, datetime]:
    """
    Parse ` -- Name <email>  <RFC 1123 date>`.

    Raises MalformedTrailerError if any part is missing or malformed.
    """
    parts = line[len(TRAILER_PREFIX) :].split("  ")
    if len(parts) != 2:
        raise MalformedTrailerError(ver_string, "can't parse author line")
    who, when = parts

    name_email = who.split(" <")
    if len(name_email) != 2 or not name_email[1].endswith(">"):
        raise MalformedTrailerError(ver_string, "error parsing maintainer - no email?")
    maintainer = Maintainer(name=name_email[0], email=name_email[1][:-1])

    try:
        date = parsedate_to_datetime(when)
    except (TypeError, ValueError) as e:
        raise MalformedTrailerError(ver_string, "could not parse release date") from e
    if date.tzinfo is None:
        raise MalformedTrailerError(ver_string, "release date has no zone offset")
    return maintainer, date


class _DebianScanner:
    """Collects one block at a time; a block is committed only at its trailer."""

    def __init__(self) -> None:
        self.changelog = Changelog()
        self.errors: list[ChangelogError] = []
        self.block: _Block | None = None

    def feed(self, line: str) -> None:
        if self.block is None:
            self.block = _parse_header(line)
            return

        if line.startswith(CHANGE_PREFIX):
            self.block.changes.append(_parse_change(line))
        elif line.startswith(TRAILER_PREFIX):
            block, self.block = self.block, None
            self._close(block, line)
        elif line and not line[0].isspace():
            header = _parse_header(line)
            if header is not None:
                # A new block started before the previous one got its trailer.
                self._record(MalformedTrailerError(self.block.ver_string, "no maintainer line"))
                self.block = header

    def finish(self) -> None:
        if self.block is not None:
            self._record(MalformedTrailerError(self.block.ver_string, "no maintainer line"))
            self.block = None

    def _close(self, block: _Block, line: str) -> None:
        try:
            maintainer, date = _parse_trailer(line, block.ver_string)
        except MalformedTrailerError as e:
            self._record(e)
            return

        release = Release(
            date=date,
            changes=block.changes,
            urgency=block.urgency,
            distribution=block.distribution,
            maintainer=maintainer,
        )
        try:
            self.changelog.add(block.version, release)
        except DuplicateReleaseError as e:
            self._record(e)

    def _record(self, err: ChangelogError) -> None:
        logger.warning("%s", err)
        self.errors.append(err)


def parse_debian(source: Source) -> Changelog:
    """
    Parse a Debian changelog.

    Blocks with a malformed or missing trailer, and repeated versions, are
    left out and reported together as a `ParseError` once the whole input has
    been read; its `changelog` attribute holds the releases that did parse.
    """
    scanner = _DebianScanner()
    for line in iter_lines(source):
        scanner.feed(line)
    scanner.finish()

    if scanner.errors:
        raise ParseError(scanner.changelog, scanner.errors) from scanner.errors[-1]
    logger.debug("Parsed %d release(s) from Debian changelog", len(scanner.changelog))
    return scanner.changelog


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _ReleaseView:
    """What the template sees for one release, defaults already applied."""

    version: str
    date: str
    urgency: str
    distribution: str
    maintainer: Maintainer
    changes: list[Change]


def format_date(d: datetime) -> str:
    """RFC 1123 with numeric zone offset, independent of the current locale."""
    return format_datetime(to_aware(d))


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("changelog_conv", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
    )


def _views(changelog: Changelog) -> list[_ReleaseView]:
    views: list[_ReleaseView] = []
    for version in reversed(changelog.sorted_versions()):
        rel = changelog[version]
        views.append(
            _ReleaseView(
                version=str(version),
                date=format_date(rel.date),
                urgency=rel.urgency or DEFAULT_URGENCY,
                distribution=rel.distribution or DEFAULT_DISTRIBUTION,
                maintainer=rel.maintainer,
                changes=sorted(rel.changes, key=lambda c: c.type),
            )
        )
    return views


def format_debian(changelog: Changelog, package: str) -> bytes:
    """
    Render `changelog` as a Debian changelog for `package`, newest release first.

    The model is not modified.
    """
    if not package.strip():
        raise FormatError("package name is required")

    template = _environment().get_template(TEMPLATE_NAME)
    text = template.render(package=package, releases=_views(changelog))
    logger.debug("Formatted %d release(s) for %s", len(changelog), package)
    return text.removesuffix("\n").encode("utf-8")
