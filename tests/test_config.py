from __future__ import annotations

from pathlib import Path

import pytest

from mac_setup.config import load_setup_config


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    cfg = load_setup_config(str(tmp_path / "setup.yaml"))
    assert cfg.brewfile == tmp_path / "Brewfile"
    assert [p.domain for p in cfg.preferences] == [
        "com.lwouis.alt-tab-macos",
        "com.sbmpost.AutoRaise",
        "art.ginzburg.MiddleClick",
    ]
    assert cfg.preferences[0].source == tmp_path / "config" / "defaults" / "alt-tab.plist"
    assert cfg.archive_app.app_name == "MouseJumpUtility.app"
    assert cfg.archive_app.archive_name == "MouseJumpUtility.zip"
    assert cfg.vscode_extensions_source == tmp_path / "config" / "vscode" / "extensions.txt"


def test_yaml_overrides_sources(tmp_path: Path) -> None:
    p = tmp_path / "setup.yaml"
    p.write_text(
        "brewfile: brew/Brewfile\n"
        "preferences:\n"
        "  - domain: com.example.App\n"
        "    file: prefs/app.plist\n"
        "archive_app:\n"
        "  url: https://example.com/dl/Thing.zip\n"
        "  app_name: Thing.app\n",
        encoding="utf-8",
    )
    cfg = load_setup_config(str(p))
    assert cfg.brewfile == tmp_path / "brew" / "Brewfile"
    assert len(cfg.preferences) == 1
    assert cfg.preferences[0].name == "com.example.App"
    assert cfg.archive_app.archive_name == "Thing.zip"
    assert cfg.archive_app.search_depth == 3


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "setup.yaml"
    p.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_setup_config(str(p))


def test_bad_preference_entry_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "setup.yaml"
    p.write_text("preferences:\n  - name: NoDomain\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_setup_config(str(p))


def test_repo_setup_yaml_matches_defaults() -> None:
    cfg = load_setup_config()
    assert [p.name for p in cfg.preferences] == ["AltTab", "AutoRaise", "MiddleClick"]
    assert cfg.brewfile.is_file()


@pytest.mark.parametrize(
    "text",
    [
        "archive_app:\n  search_depth: three\n",
        "archive_app: MouseJumpUtility.app\n",
        "preferences: oops\n",
        "brewfile: [a, b]\n",
    ],
)
def test_invalid_values_fail_at_load(tmp_path: Path, text: str) -> None:
    p = tmp_path / "setup.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_setup_config(str(p))
