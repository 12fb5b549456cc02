from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


def _home() -> Path:
    return Path.home()


@dataclass(frozen=True)
class Paths:
    """Fixed per-user and system destinations.

    Not read from setup.yaml; tests construct their own instance.
    """

    home: Path = field(default_factory=_home)
    applications_dir: Path = Path("/Applications")
    # Apple Silicon prefix first, then the Intel one.
    brew_candidates: Tuple[Path, ...] = (
        Path("/opt/homebrew/bin/brew"),
        Path("/usr/local/bin/brew"),
    )

    @property
    def karabiner_dir(self) -> Path:
        return self.home / ".config" / "karabiner"

    @property
    def vscode_user_dir(self) -> Path:
        return self.home / "Library" / "Application Support" / "Code" / "User"

    @property
    def log_default(self) -> Path:
        return self.home / "Library" / "Logs" / "mac-setup.log"


PATHS = Paths()
