"""
changelog_conv package

Converts keep-a-changelog style Markdown changelogs into Debian changelogs,
and parses Debian changelogs back into the same model.

Key responsibilities are split across modules:
- `version.py`: semantic version grammar and ordering
- `model.py`: Change / Maintainer / Release / Changelog
- `markdown.py`: keep-a-changelog Markdown -> `Changelog`
- `debian.py`: Debian changelog <-> `Changelog`
- `config.py`: YAML/environment settings for the CLI
- `cli.py`: CLI entrypoint and orchestration (parse -> format -> write)
"""

from __future__ import annotations

__all__ = [
    "Change",
    "Changelog",
    "ChangelogError",
    "DuplicateReleaseError",
    "EncodingError",
    "MalformedTrailerError",
    "Maintainer",
    "NotSemverError",
    "ParseError",
    "Release",
    "Version",
    "__version__",
    "format_debian",
    "parse_debian",
    "parse_markdown",
    "parse_version",
]

__version__ = "0.1.0"

from changelog_conv.debian import format_debian, parse_debian  # noqa: E402
from changelog_conv.errors import (  # noqa: E402
    ChangelogError,
    DuplicateReleaseError,
    EncodingError,
    MalformedTrailerError,
    NotSemverError,
    ParseError,
)
from changelog_conv.markdown import parse_markdown  # noqa: E402
from changelog_conv.model import Change, Changelog, Maintainer, Release  # noqa: E402
from changelog_conv.version import Version, parse_version  # noqa: E402
