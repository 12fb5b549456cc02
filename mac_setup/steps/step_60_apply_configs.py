from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from ..context import SetupCtx
from ..errors import StepWarning
from ..lib.assets import copy_file
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class ApplyConfigFileStep:
    """Copy one repo-managed config file over its fixed destination."""

    policy = FailurePolicy.FATAL

    def __init__(
        self,
        step_id: str,
        title: str,
        source: Callable[[SetupCtx], Path],
        destination: Callable[[SetupCtx], Path],
    ):
        self.step_id = step_id
        self.title = title
        self._source = source
        self._destination = destination

    def check(self, ctx: SetupCtx) -> Check:
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        src = self._source(ctx)
        if not src.is_file():
            raise StepWarning(f"Skip (not found): {src}")

        dst = self._destination(ctx)
        copy_file(src, dst, dry_run=ctx.dry_run)
        logger.info("    Applied: %s", dst)


def karabiner_step() -> ApplyConfigFileStep:
    return ApplyConfigFileStep(
        "60_karabiner",
        "Apply Karabiner config",
        lambda ctx: ctx.cfg.karabiner_source,
        lambda ctx: ctx.paths.karabiner_dir / "karabiner.json",
    )


def vscode_settings_step() -> ApplyConfigFileStep:
    return ApplyConfigFileStep(
        "70_vscode_settings",
        "Apply VSCode settings.json",
        lambda ctx: ctx.cfg.vscode_settings_source,
        lambda ctx: ctx.paths.vscode_user_dir / "settings.json",
    )
