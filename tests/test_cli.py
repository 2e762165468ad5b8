from pathlib import Path

import pytest

from changelog_conv.cli import main

CHANGELOG_MD = """\
# Changelog

## [Unreleased]
### Added
- something pending

## [2.2.0] - 2019-09-21
### Added
- a way to set custom battery threshold

## [2.1.0] - 2019-08-02
### Fixed
- crash on empty config
### Added
- tray icon
"""

EXPECTED = """\
awesomeapp (2.2.0) stable; urgency=medium

  * Added: a way to set custom battery threshold

 -- John Doe <john@doe.me>  Sat, 21 Sep 2019 00:00:00 +0000

awesomeapp (2.1.0) stable; urgency=medium

  * Added: tray icon
  * Fixed: crash on empty config

 -- John Doe <john@doe.me>  Fri, 02 Aug 2019 00:00:00 +0000
"""


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEBFULLNAME", raising=False)
    monkeypatch.delenv("DEBEMAIL", raising=False)
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG_MD, encoding="utf-8")
    return tmp_path


def test_convert_markdown(workdir: Path) -> None:
    rc = main(["CHANGELOG.md", "-n", "John Doe", "-e", "john@doe.me", "-p", "awesomeapp"])
    assert rc == 0
    assert (workdir / "debian.changelog").read_text(encoding="utf-8") == EXPECTED


def test_config_file_and_flag_precedence(workdir: Path) -> None:
    (workdir / "conv.yml").write_text(
        "package: awesomeapp\noutput: changelog.deb\nmaintainer:\n  name: Someone Else\n  email: john@doe.me\n",
        encoding="utf-8",
    )
    rc = main(["CHANGELOG.md", "-c", "conv.yml", "-n", "John Doe"])
    assert rc == 0
    assert (workdir / "changelog.deb").read_text(encoding="utf-8") == EXPECTED


def test_convert_debian_input(workdir: Path) -> None:
    (workdir / "in.changelog").write_text(EXPECTED, encoding="utf-8")
    rc = main(["in.changelog", "--from", "debian", "-n", "John Doe", "-e", "john@doe.me", "-p", "awesomeapp"])
    assert rc == 0
    assert (workdir / "debian.changelog").read_text(encoding="utf-8") == EXPECTED


def test_default_maintainer(workdir: Path) -> None:
    assert main(["CHANGELOG.md"]) == 0
    text = (workdir / "debian.changelog").read_text(encoding="utf-8")
    assert text.startswith("package (2.2.0) stable; urgency=medium\n")
    assert " -- Maintainer <maintainer@example.com>  Sat, 21 Sep 2019 00:00:00 +0000\n" in text


def test_parse_error_exits_non_zero(workdir: Path) -> None:
    (workdir / "dup.md").write_text("## 1.0.0 - 2020-01-01\n## 1.0.0 - 2020-01-02\n", encoding="utf-8")
    assert main(["dup.md"]) == 1
    assert not (workdir / "debian.changelog").exists()


def test_missing_input_file(workdir: Path) -> None:
    assert main(["does-not-exist.md"]) == 1


def test_empty_package_name(workdir: Path) -> None:
    assert main(["CHANGELOG.md", "-p", ""]) == 1


def test_no_filename_prints_usage(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: changelog" in capsys.readouterr().err


def test_invalid_utf8_exits_non_zero(workdir: Path) -> None:
    (workdir / "bad.md").write_bytes(b"## 1.0.0 - 2020-01-01\n- caf\xe9\n")
    assert main(["bad.md"]) == 1
    assert not (workdir / "debian.changelog").exists()
