from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_NAME = "setup.yaml"

DEFAULT_PREFERENCES: List[Dict[str, str]] = [
    {"name": "AltTab", "domain": "com.lwouis.alt-tab-macos", "file": "config/defaults/alt-tab.plist"},
    {"name": "AutoRaise", "domain": "com.sbmpost.AutoRaise", "file": "config/defaults/autoraise.plist"},
    {"name": "MiddleClick", "domain": "art.ginzburg.MiddleClick", "file": "config/defaults/middleclick.plist"},
]

DEFAULT_ARCHIVE_URL = (
    "https://github.com/fruitjuice088/MouseJumpUtility/releases/download/v1.0.0/MouseJumpUtility.zip"
)


def repo_root() -> Path:
    # mac_setup/config.py -> mac_setup -> repo root
    return Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class PreferenceImport:
    name: str
    domain: str
    source: Path


@dataclass(frozen=True)
class ArchiveApp:
    url: str
    app_name: str
    search_depth: int = 3

    @property
    def archive_name(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[-1] or "download.zip"


@dataclass(frozen=True)
class SetupConfig:
    raw: Dict[str, Any]
    root: Path

    def _path(self, key: str, default: str) -> Path:
        p = Path(str(self.raw.get(key) or default)).expanduser()
        return p if p.is_absolute() else self.root / p

    @property
    def brewfile(self) -> Path:
        return self._path("brewfile", "Brewfile")

    @property
    def preferences(self) -> List[PreferenceImport]:
        items = self.raw.get("preferences")
        if items is None:
            items = DEFAULT_PREFERENCES
        if not isinstance(items, list):
            raise ValueError(f"{DEFAULT_CONFIG_NAME}: preferences must be a list")
        out: List[PreferenceImport] = []
        for item in items:
            if not isinstance(item, dict) or not item.get("domain") or not item.get("file"):
                raise ValueError(f"{DEFAULT_CONFIG_NAME}: each preference needs domain and file: {item!r}")
            src = Path(str(item["file"])).expanduser()
            out.append(
                PreferenceImport(
                    name=str(item.get("name") or item["domain"]),
                    domain=str(item["domain"]),
                    source=src if src.is_absolute() else self.root / src,
                )
            )
        return out

    @property
    def archive_app(self) -> ArchiveApp:
        a = self.raw.get("archive_app") or {}
        if not isinstance(a, dict):
            raise ValueError(f"{DEFAULT_CONFIG_NAME}: archive_app must be a mapping")
        try:
            depth = int(a.get("search_depth") or 3)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{DEFAULT_CONFIG_NAME}: archive_app.search_depth must be an integer") from e
        if depth < 1:
            raise ValueError(f"{DEFAULT_CONFIG_NAME}: archive_app.search_depth must be at least 1")
        return ArchiveApp(
            url=str(a.get("url") or DEFAULT_ARCHIVE_URL),
            app_name=str(a.get("app_name") or "MouseJumpUtility.app"),
            search_depth=depth,
        )

    @property
    def karabiner_source(self) -> Path:
        return self._path("karabiner", "config/karabiner/karabiner.json")

    @property
    def vscode_settings_source(self) -> Path:
        return self._path("vscode_settings", "config/vscode/settings.json")

    @property
    def vscode_extensions_source(self) -> Path:
        return self._path("vscode_extensions", "config/vscode/extensions.txt")

    def validate(self) -> "SetupConfig":
        """Read every property once so a bad setup.yaml fails before any step runs."""

        self.preferences
        self.archive_app
        for key in ("brewfile", "karabiner", "vscode_settings", "vscode_extensions"):
            value = self.raw.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{DEFAULT_CONFIG_NAME}: {key} must be a path string")
        return self


def load_setup_config(path: Optional[str] = None) -> SetupConfig:
    """Load setup.yaml. A missing file means built-in defaults."""

    p = Path(path) if path else repo_root() / DEFAULT_CONFIG_NAME
    root = p.resolve().parent

    if not p.exists():
        return SetupConfig(raw={}, root=root)

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{p.name}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    return SetupConfig(raw=raw, root=root).validate()
