from __future__ import annotations

import logging

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


def clt_installed(*, runner: Runner = run_cmd) -> bool:
    # Read-only probe: runs for real even under --dry-run.
    try:
        r = runner(["xcode-select", "-p"], check=False)
    except OSError:
        return False
    return r.returncode == 0


def trigger_clt_install(*, runner: Runner = run_cmd, dry_run: bool = False) -> bool:
    """Open the GUI installer. Returns False if it could not be launched.

    Completion cannot be observed synchronously either way.
    """

    try:
        r = runner(["xcode-select", "--install"], check=False, dry_run=dry_run)
    except OSError as e:
        logger.warning("Could not launch xcode-select --install: %s", e)
        return False
    return r.returncode == 0
