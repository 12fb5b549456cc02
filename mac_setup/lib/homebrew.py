from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .command import Runner, find_tool, run_cmd

logger = logging.getLogger(__name__)

INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


def locate_brew(candidates: Sequence[Path], search_path: Optional[str] = None) -> Optional[str]:
    """Probe the well-known prefixes first, then PATH."""

    for c in candidates:
        if c.is_file() and os.access(c, os.X_OK):
            return str(c)
    return find_tool("brew", search_path)


def install_homebrew(
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    script = runner(["curl", "-fsSL", INSTALL_SCRIPT_URL], env=env, dry_run=dry_run)
    # The installer prompts for sudo and RETURN, so keep the terminal attached.
    runner(["/bin/bash", "-c", script.stdout], env=env, capture=False, dry_run=dry_run)


def brew_version(brew: str, *, env: Mapping[str, str] | None = None, runner: Runner = run_cmd) -> str:
    try:
        r = runner([brew, "--version"], check=False, env=env)
    except OSError:
        return "unknown"
    lines = r.stdout.splitlines()
    return lines[0] if lines else "unknown"


def brew_update(brew: str, *, env: Mapping[str, str] | None = None, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    runner([brew, "update"], env=env, capture=False, dry_run=dry_run)


def bundle_satisfied(
    brew: str,
    brewfile: Path,
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
) -> bool:
    # Read-only probe: runs for real even under --dry-run.
    try:
        r = runner([brew, "bundle", "check", "--no-upgrade", "--file", str(brewfile)], check=False, env=env)
    except OSError:
        return False
    return r.returncode == 0


def brew_bundle(
    brew: str,
    brewfile: Path,
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    runner([brew, "bundle", "--file", str(brewfile)], env=env, capture=False, dry_run=dry_run)
