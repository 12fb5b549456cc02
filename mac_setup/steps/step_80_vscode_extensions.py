from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import StepWarning
from ..lib.manifests import parse_extension_list
from ..lib.vscode import install_extension
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class VSCodeExtensionsStep:
    step_id = "80_vscode_extensions"
    title = "Install VSCode extensions"
    policy = FailurePolicy.WARN

    def check(self, ctx: SetupCtx) -> Check:
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        src = ctx.cfg.vscode_extensions_source
        if not src.is_file():
            raise StepWarning(f"Skip (not found): {src}")

        # `code` comes from the VS Code cask or the in-app "Install 'code' command" action.
        code = ctx.find_tool("code")
        if not code:
            raise StepWarning(
                "'code' command not found. Open VSCode once, then run: Command Palette -> "
                "'Shell Command: Install 'code' command in PATH', and re-run mac-setup."
            )

        extensions = parse_extension_list(src)
        for bad in extensions.invalid:
            logger.warning("    Skip invalid entry: %s", bad)

        failed: list[str] = []
        for ext in extensions.ids:
            logger.info("    Installing: %s", ext)
            if not install_extension(code, ext, env=ctx.tool_env(), runner=ctx.runner, dry_run=ctx.dry_run):
                failed.append(ext)

        if failed:
            logger.warning("    %d of %d extensions failed: %s", len(failed), len(extensions.ids), ", ".join(failed))
        logger.info("    Done.")
