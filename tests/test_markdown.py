import io
from datetime import datetime, timezone

import pytest

from changelog_conv.errors import DuplicateReleaseError, EncodingError, NotSemverError, ParseError
from changelog_conv.markdown import parse_markdown
from changelog_conv.model import ZERO_DATE, Change
from changelog_conv.version import Version

CHANGELOG_MD = """\
# Changelog
All notable changes to this project will be documented in this file.

## [Unreleased]
### Added
- something not released yet

## [2.2.0] - 2019-09-21
### Added
- a way to set custom battery threshold

## [2.1.0] - 2019-08-02
### Fixed
- crash on empty config
### Added
- tray icon

[Unreleased]: https://example.com/compare/v2.2.0...HEAD
"""


def test_parse_single_release() -> None:
    text = "## [2.2.0] - 2019-09-21\n### Added\n- a way to set custom battery threshold\n"
    cl = parse_markdown(io.StringIO(text))

    assert list(cl) == [Version(2, 2, 0)]
    rel = cl[Version(2, 2, 0)]
    assert rel.date == datetime(2019, 9, 21, tzinfo=timezone.utc)
    assert rel.changes == [Change(type="Added", body="a way to set custom battery threshold")]


def test_parse_keep_a_changelog_document() -> None:
    cl = parse_markdown(io.StringIO(CHANGELOG_MD))

    assert set(cl) == {Version(2, 2, 0), Version(2, 1, 0)}
    assert cl[Version(2, 1, 0)].changes == [
        Change(type="Fixed", body="crash on empty config"),
        Change(type="Added", body="tray icon"),
    ]
    # Nothing from the unreleased section leaks into a release.
    assert all(c.body != "something not released yet" for rel in cl.values() for c in rel.changes)


def test_parse_accepts_bytes() -> None:
    cl = parse_markdown(io.BytesIO(CHANGELOG_MD.encode("utf-8")))
    assert len(cl) == 2


def test_heading_without_date_gets_zero_date() -> None:
    cl = parse_markdown(io.StringIO("## 1.0.0\n- initial release\n"))
    rel = cl[Version(1, 0, 0)]
    assert rel.date == ZERO_DATE
    assert rel.changes == [Change(type="", body="initial release")]


def test_bullets_before_first_release_are_ignored() -> None:
    cl = parse_markdown(io.StringIO("- stray\n## [0.1.0] - 2020-01-01\n- kept\n"))
    assert cl[Version(0, 1, 0)].changes == [Change(body="kept")]


def test_duplicate_release_is_reported_and_first_kept() -> None:
    text = (
        "## [1.0.0] - 2020-01-02\n"
        "### Added\n"
        "- first\n"
        "## [1.0.0] - 2020-02-02\n"
        "- second\n"
        "## [0.9.0] - 2019-12-01\n"
        "- older\n"
    )
    with pytest.raises(ParseError) as exc_info:
        parse_markdown(io.StringIO(text))

    err = exc_info.value
    assert isinstance(err.errors[-1], DuplicateReleaseError)
    assert err.errors[-1].version == "1.0.0"
    assert "1.0.0" in str(err)

    cl = err.changelog
    assert cl[Version(1, 0, 0)].changes == [Change(type="Added", body="first")]
    assert cl[Version(1, 0, 0)].date == datetime(2020, 1, 2, tzinfo=timezone.utc)
    assert cl[Version(0, 9, 0)].changes == [Change(type="Added", body="older")]


def test_invalid_version_is_skipped_and_reported() -> None:
    text = (
        "## [1.1.0] - 2020-03-01\n"
        "- good\n"
        "## [1.2] - 2020-04-01\n"
        "- belongs to the broken heading\n"
        "## [1.3.0] - 2020-05-01\n"
        "- also good\n"
    )
    with pytest.raises(ParseError) as exc_info:
        parse_markdown(io.StringIO(text))

    err = exc_info.value
    assert isinstance(err.errors[-1], NotSemverError)
    assert isinstance(err.__cause__, NotSemverError)
    cl = err.changelog
    assert set(cl) == {Version(1, 1, 0), Version(1, 3, 0)}
    assert cl[Version(1, 1, 0)].changes == [Change(body="good")]


def test_v_prefixed_heading_still_finds_version() -> None:
    cl = parse_markdown(io.StringIO("## v3.0.0 - 2021-06-01\n"))
    assert Version(3, 0, 0) in cl


def test_invalid_utf8_is_reported() -> None:
    with pytest.raises(EncodingError) as exc_info:
        parse_markdown(io.BytesIO(b"## 1.0.0 - 2020-01-01\n- caf\xe9\n"))
    assert exc_info.value.lineno == 2
