"""
cli.py

Responsibility: CLI entrypoint for changelog-conv.

High-level flow:
1) Load settings (`config.py`), then apply command-line overrides
2) Parse the input file -> `Changelog` (`markdown.py` or `debian.py`)
3) Set the maintainer on every release
4) Format as a Debian changelog and write it to the output path

Parsing and formatting never exit the process; this module turns their errors
into a message and a non-zero exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from changelog_conv import __version__
from changelog_conv.config import ConverterConfig, load_config
from changelog_conv.debian import format_debian, parse_debian
from changelog_conv.errors import ChangelogError
from changelog_conv.markdown import parse_markdown
from changelog_conv.model import Changelog
from changelog_conv.reader import Source

logger = logging.getLogger(__name__)

PARSERS: dict[str, Callable[[Source], Changelog]] = {
    "markdown": parse_markdown,
    "debian": parse_debian,
}


class CLIError(RuntimeError):
    pass


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the root logger once: short level tag and message on stderr.
    """
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname).4s] %(message)s"))
    root.addHandler(handler)


def _resolve_config(args: argparse.Namespace) -> ConverterConfig:
    config = load_config(args.config)
    return config.override(
        package=args.package,
        name=args.name,
        email=args.email,
        output=args.output,
    )


def _read_changelog(path: Path, input_format: str) -> Changelog:
    try:
        with path.open("rb") as f:
            return PARSERS[input_format](f)
    except OSError as e:
        raise CLIError(f"could not open file: {e}") from e


def _write_output(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as e:
        raise CLIError(f"could not write {path}: {e}") from e


def convert_cmd(args: argparse.Namespace) -> int:
    config = _resolve_config(args)

    try:
        changelog = _read_changelog(Path(args.filename), args.input_format)
    except ChangelogError as e:
        raise CLIError(f"could not parse changelog: {e}") from e

    changelog = changelog.with_maintainer(config.maintainer)

    try:
        data = format_debian(changelog, config.package)
    except ChangelogError as e:
        raise CLIError(f"could not convert changelog to Debian format: {e}") from e

    out_path = Path(config.output)
    _write_output(out_path, data)
    logger.info("Wrote %d release(s) to %s", len(changelog), out_path)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="changelog",
        description="changelog is a tool for converting keep-a-changelog-style changelog to Debian changelog.",
    )
    p.add_argument("filename", nargs="?", default=None, help="Changelog file to convert")
    p.add_argument("-n", "--name", default=None, help="Maintainer name (default: Maintainer)")
    p.add_argument("-e", "--email", default=None, help="Maintainer email (default: maintainer@example.com)")
    p.add_argument("-p", "--package", default=None, help="Package name (default: package)")
    p.add_argument("-o", "--output", default=None, help="Output file (default: debian.changelog)")
    p.add_argument("-c", "--config", default=None, help="YAML config file with package/maintainer/output")
    p.add_argument(
        "-f",
        "--from",
        dest="input_format",
        choices=sorted(PARSERS),
        default="markdown",
        help="Input format (default: markdown)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))

    if not args.filename:
        parser.print_help(sys.stderr)
        return 0

    try:
        return convert_cmd(args)
    except (CLIError, ChangelogError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
