from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotifyResult:
    """Outcome of a best-effort signal. Callers may discard it."""

    delivered: bool
    detail: str = ""


def import_domain(domain: str, plist: Path, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    runner(["defaults", "import", domain, str(plist)], dry_run=dry_run)


def refresh_preferences_cache(*, runner: Runner = run_cmd, dry_run: bool = False) -> NotifyResult:
    """Restart cfprefsd so imported values show up without logging out."""

    try:
        r = runner(["killall", "cfprefsd"], check=False, dry_run=dry_run)
    except OSError as e:
        return NotifyResult(delivered=False, detail=str(e))
    if r.returncode != 0:
        return NotifyResult(delivered=False, detail=r.stderr.strip())
    return NotifyResult(delivered=True)
