"""
markdown.py

Responsibility: parse a keep-a-changelog style Markdown document into a `Changelog`.

Only three line shapes matter:
- `## ...`  opens a release (version and optional trailing ` YYYY-MM-DD` date)
- `### ...` sets the change group ("Added", "Fixed", ...) for following bullets
- `- ...`   adds a change to the open release

Everything else is ignored.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from changelog_conv.errors import ChangelogError, DuplicateReleaseError, NotSemverError, ParseError
from changelog_conv.model import ZERO_DATE, Change, Changelog, Release
from changelog_conv.reader import Source, iter_lines
from changelog_conv.version import find_version, parse_version

logger = logging.getLogger(__name__)

RELEASE_PREFIX = "## "
GROUP_PREFIX = "### "
CHANGE_PREFIX = "- "

_DATE_RE = re.compile(r" (\d{4}-\d{2}-\d{2})$")
_UNRELEASED_RE = re.compile(r"^\[?unreleased\]?$", re.IGNORECASE)


def _parse_date(line: str) -> datetime:
    m = _DATE_RE.search(line)
    if m is None:
        return ZERO_DATE
    try:
        return datetime.strptime(m.group(1), "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        # e.g. 2019-13-45: shaped like a date, but not one.
        return ZERO_DATE


class _MarkdownScanner:
    """
    Line-by-line state machine: the release currently open (if any) and the
    last seen change group.
    """

    def __init__(self) -> None:
        self.changelog = Changelog()
        self.errors: list[ChangelogError] = []
        self.current: Release | None = None
        self.group = ""

    def feed(self, line: str) -> None:
        if line.startswith(RELEASE_PREFIX):
            self._open_release(line)
        elif line.startswith(GROUP_PREFIX):
            self.group = line[len(GROUP_PREFIX) :]
        elif line.startswith(CHANGE_PREFIX) and self.current is not None:
            self.current.changes.append(Change(type=self.group, body=line[len(CHANGE_PREFIX) :]))

    def _open_release(self, line: str) -> None:
        self.current = None
        heading = line[len(RELEASE_PREFIX) :].strip()
        if _UNRELEASED_RE.match(heading):
            logger.debug("Skipping unreleased section")
            return

        ver_string = find_version(line)
        try:
            version = parse_version(ver_string)
        except NotSemverError as e:
            logger.debug("Skipping heading without a valid version: %r", line)
            self.errors.append(e)
            return

        release = Release(date=_parse_date(line))
        try:
            self.changelog.add(version, release)
        except DuplicateReleaseError as e:
            logger.warning("%s", e)
            self.errors.append(e)
            return
        self.current = release


def parse_markdown(source: Source) -> Changelog:
    """
    Parse a keep-a-changelog Markdown document.

    Headings with an invalid version and duplicate versions don't stop the
    parse. If any were found, `ParseError` is raised at the end; its
    `changelog` attribute holds all releases that parsed fine.
    """
    scanner = _MarkdownScanner()
    for line in iter_lines(source):
        scanner.feed(line)

    if scanner.errors:
        raise ParseError(scanner.changelog, scanner.errors) from scanner.errors[-1]
    logger.debug("Parsed %d release(s) from Markdown", len(scanner.changelog))
    return scanner.changelog
