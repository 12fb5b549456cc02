from __future__ import annotations

import logging
from typing import Mapping

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


def install_extension(
    code: str,
    ext: str,
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> bool:
    """Install one extension. Returns False instead of raising on failure."""

    try:
        r = runner([code, "--install-extension", ext], check=False, env=env, dry_run=dry_run)
    except OSError as e:
        logger.warning("    Failed: %s (%s)", ext, e)
        return False
    if r.returncode != 0:
        logger.warning("    Failed: %s (exit %s)", ext, r.returncode)
        return False
    return True
