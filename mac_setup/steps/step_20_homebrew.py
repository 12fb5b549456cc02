from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import FatalError
from ..lib.homebrew import brew_version, install_homebrew, locate_brew
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class HomebrewStep:
    step_id = "20_homebrew"
    title = "Homebrew"
    policy = FailurePolicy.FATAL

    def _locate(self, ctx: SetupCtx) -> str | None:
        return locate_brew(ctx.paths.brew_candidates, ctx.search_path)

    def check(self, ctx: SetupCtx) -> Check:
        brew = self._locate(ctx)
        if brew:
            ctx.brew = brew
            logger.info("    brew: %s", brew_version(brew, env=ctx.tool_env(), runner=ctx.runner))
            return Check.satisfied(f"Homebrew already installed: {brew}")
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        logger.info("    Installing Homebrew...")
        install_homebrew(env=ctx.tool_env(), runner=ctx.runner, dry_run=ctx.dry_run)

        brew = self._locate(ctx)
        if not brew and ctx.dry_run:
            brew = str(ctx.paths.brew_candidates[0])
        if not brew:
            raise FatalError(
                "Homebrew install finished but brew was not found in "
                + ", ".join(str(c) for c in ctx.paths.brew_candidates),
                "Check the installer output above, then re-run mac-setup.",
            )

        ctx.brew = brew
        logger.info("    brew: %s", brew_version(brew, env=ctx.tool_env(), runner=ctx.runner))
