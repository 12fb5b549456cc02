from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .config import SetupConfig
from .lib.command import Runner, find_tool, run_cmd
from .lib.env import PATHS, Paths


@dataclass
class SetupCtx:
    """Everything a step needs. `brew` is filled in by the Homebrew step."""

    cfg: SetupConfig
    paths: Paths = PATHS
    runner: Runner = run_cmd
    dry_run: bool = False
    search_path: Optional[str] = field(default_factory=lambda: os.environ.get("PATH", os.defpath))
    brew: Optional[str] = None

    def tool_path(self) -> str:
        """Search PATH with the resolved brew bin directory in front."""

        parts = []
        if self.brew:
            parts.append(str(Path(self.brew).parent))
        if self.search_path:
            parts.append(self.search_path)
        return os.pathsep.join(parts)

    def tool_env(self) -> Dict[str, str]:
        return {"PATH": self.tool_path()}

    def find_tool(self, name: str) -> Optional[str]:
        return find_tool(name, self.tool_path())
