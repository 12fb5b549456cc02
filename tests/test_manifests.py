from __future__ import annotations

from pathlib import Path

import pytest

from mac_setup.errors import ManifestError
from mac_setup.lib.manifests import parse_brewfile, parse_extension_list


def test_parse_brewfile_kinds_and_comments(tmp_path: Path) -> None:
    p = tmp_path / "Brewfile"
    p.write_text(
        "# Taps\n"
        'tap "dimentium/autoraise"\n'
        "\n"
        'brew "git"  # version control\n'
        'brew "dimentium/autoraise/autoraise"\n'
        'cask "alt-tab"\n'
        'mas "Xcode", id: 497799835\n',
        encoding="utf-8",
    )
    bf = parse_brewfile(p)
    assert [e.kind for e in bf.entries] == ["tap", "brew", "brew", "cask", "mas"]
    assert bf.names("brew") == ["git", "dimentium/autoraise/autoraise"]
    assert bf.entries[1].line_no == 4
    assert bf.summary() == "tap=1, brew=2, cask=1, mas=1"


def test_parse_brewfile_passes_other_lines_through(tmp_path: Path) -> None:
    p = tmp_path / "Brewfile"
    p.write_text(
        "cask_args appdir: \"~/Applications\"\n"
        "brew 'git'\n"
        "cask \"alt-tab\"\n"
        "formula \"jq\"\n",
        encoding="utf-8",
    )
    bf = parse_brewfile(p)
    assert bf.names("brew") == ["git"]
    assert bf.names("cask") == ["alt-tab"]
    assert bf.other_lines == [1, 4]
    assert bf.summary() == "brew=1, cask=1, other=2"


def test_parse_brewfile_rejects_binary(tmp_path: Path) -> None:
    p = tmp_path / "Brewfile"
    p.write_bytes(b"\xff\xfe\x00brew")
    with pytest.raises(ManifestError):
        parse_brewfile(p)


def test_parse_brewfile_missing_is_not_a_parse_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_brewfile(tmp_path / "Brewfile")


def test_parse_extension_list_skips_blank_lines(tmp_path: Path) -> None:
    p = tmp_path / "extensions.txt"
    p.write_text("ms-python.python\n\n  \neamodio.gitlens\nms-python.black-formatter@2024.2.0", encoding="utf-8")
    assert parse_extension_list(p).ids == [
        "ms-python.python",
        "eamodio.gitlens",
        "ms-python.black-formatter@2024.2.0",
    ]


def test_parse_extension_list_keeps_good_ids_around_bad_lines(tmp_path: Path) -> None:
    p = tmp_path / "extensions.txt"
    p.write_text("# python\nms-python.python\nnot an id\neamodio.gitlens\n", encoding="utf-8")
    exts = parse_extension_list(p)
    assert exts.ids == ["ms-python.python", "eamodio.gitlens"]
    assert [e.line_no for e in exts.invalid] == [3]
