from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import StepWarning
from ..lib.command import CommandError
from ..lib.defaults import import_domain, refresh_preferences_cache
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class ImportDefaultsStep:
    step_id = "40_import_defaults"
    title = "Import app preferences (defaults)"
    policy = FailurePolicy.WARN

    def check(self, ctx: SetupCtx) -> Check:
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        imported = 0
        failed: list[str] = []

        for pref in ctx.cfg.preferences:
            if not pref.source.is_file():
                logger.warning("    Skip %s (plist not found): %s", pref.name, pref.source)
                continue
            logger.info("    Import %s: %s", pref.name, pref.domain)
            try:
                import_domain(pref.domain, pref.source, runner=ctx.runner, dry_run=ctx.dry_run)
            except (CommandError, OSError) as e:
                logger.warning("    Import %s failed: %s", pref.name, e)
                failed.append(pref.name)
                continue
            imported += 1

        if imported:
            logger.info("    Restarting preference daemon (cfprefsd) for faster propagation.")
            refresh_preferences_cache(runner=ctx.runner, dry_run=ctx.dry_run)

        if failed:
            raise StepWarning(f"Preference import failed for: {', '.join(failed)}")
