from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import FatalError
from ..lib.archive import download, find_entry, privileged_copy, scratch_dir, unpack_zip
from ..lib.command import CommandError
from ..pipeline import Check, FailurePolicy

logger = logging.getLogger(__name__)


class InstallArchiveAppStep:
    """Install the one app that is only published as a release .zip."""

    step_id = "50_install_archive_app"
    policy = FailurePolicy.FATAL

    def __init__(self, app_name: str = "MouseJumpUtility.app"):
        self.title = f"Install {app_name.removesuffix('.app')} (.zip -> .app)"

    def check(self, ctx: SetupCtx) -> Check:
        dest = ctx.paths.applications_dir / ctx.cfg.archive_app.app_name
        if dest.exists():
            return Check.satisfied(f"Already installed: {dest}")
        return Check.unsatisfied()

    def run(self, ctx: SetupCtx) -> None:
        app = ctx.cfg.archive_app
        dest = ctx.paths.applications_dir / app.app_name

        for tool in ("curl", "unzip"):
            if not ctx.find_tool(tool):
                raise FatalError(f"Command not found: {tool}")

        if ctx.dry_run:
            logger.info("    Would install %s from %s into %s", app.app_name, app.url, ctx.paths.applications_dir)
            return

        with scratch_dir() as tmp:
            archive = tmp / app.archive_name
            unpacked = tmp / "unzipped"

            logger.info("    Downloading: %s", app.url)
            try:
                download(app.url, archive, env=ctx.tool_env(), runner=ctx.runner)
            except CommandError as e:
                raise FatalError(f"Download failed: {app.url}", "Check the network connection, then re-run.") from e

            logger.info("    Unzipping...")
            try:
                unpack_zip(archive, unpacked, env=ctx.tool_env(), runner=ctx.runner)
            except CommandError as e:
                raise FatalError(f"Could not unpack {archive.name}; the download may be corrupt.") from e

            found = find_entry(unpacked, app.app_name, app.search_depth) if unpacked.is_dir() else None
            if found is None:
                raise FatalError(
                    f"Could not find {app.app_name} in the zip (archive layout changed?).",
                    "Update archive_app in setup.yaml.",
                )

            if dest.exists():
                logger.info("    Already installed: %s (skip)", dest)
                return

            logger.info("    Copying to %s (requires sudo)...", ctx.paths.applications_dir)
            try:
                privileged_copy(found, ctx.paths.applications_dir, runner=ctx.runner)
            except CommandError as e:
                raise FatalError(f"Copy to {ctx.paths.applications_dir} failed.", "Re-run and approve the sudo prompt.") from e

        logger.info("    Installed: %s", dest)
        logger.info("    NOTE: On first launch, Gatekeeper may block it (manual allow may be required).")
