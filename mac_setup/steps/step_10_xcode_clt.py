from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import FatalError
from ..lib.xcode import clt_installed, trigger_clt_install
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)

REMEDY = "Complete the GUI installer, then re-run mac-setup."


class XcodeCLTStep:
    step_id = "10_xcode_clt"
    title = "Xcode Command Line Tools"
    policy = FailurePolicy.FATAL

    def check(self, ctx: SetupCtx) -> Check:
        if clt_installed(runner=ctx.runner):
            return Check.satisfied("Xcode CLT already installed.")
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        logger.info("    Installing Xcode CLT (GUI prompt will appear).")
        if not trigger_clt_install(runner=ctx.runner, dry_run=ctx.dry_run):
            logger.warning("    The installer prompt may not have opened; run `xcode-select --install` manually.")
        # The installer runs asynchronously; this run cannot continue either way.
        raise FatalError("Xcode Command Line Tools are not installed yet.", REMEDY)
