from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import FatalError
from ..lib.homebrew import brew_bundle, brew_update, bundle_satisfied
from ..lib.manifests import parse_brewfile
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class BrewBundleStep:
    step_id = "30_brew_bundle"
    title = "brew bundle"
    policy = FailurePolicy.FATAL

    def check(self, ctx: SetupCtx) -> Check:
        brewfile = ctx.cfg.brewfile
        if not brewfile.is_file():
            return Check.fatal(f"Brewfile not found: {brewfile}", "Restore the Brewfile, then re-run mac-setup.")
        if not ctx.brew:
            return Check.fatal("brew is not available.")
        if bundle_satisfied(ctx.brew, brewfile, env=ctx.tool_env(), runner=ctx.runner):
            return Check.satisfied("Everything in the Brewfile is already installed.")
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        if not ctx.brew:
            raise FatalError("brew is not available.")
        brewfile = ctx.cfg.brewfile
        manifest = parse_brewfile(brewfile)
        if not manifest.entries and not manifest.other_lines:
            raise FatalError(f"Brewfile has no declarations: {brewfile}")
        logger.info("    %s (%s)", brewfile, manifest.summary())

        brew_update(ctx.brew, env=ctx.tool_env(), runner=ctx.runner, dry_run=ctx.dry_run)
        brew_bundle(ctx.brew, brewfile, env=ctx.tool_env(), runner=ctx.runner, dry_run=ctx.dry_run)
