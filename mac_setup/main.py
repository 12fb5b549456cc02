from __future__ import annotations

import argparse
import logging
import platform
import sys
from typing import List, Optional

from .config import SetupConfig, load_setup_config
from .context import SetupCtx
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, Step, run_pipeline
from .steps import (
    BrewBundleStep,
    HomebrewStep,
    ImportDefaultsStep,
    InstallArchiveAppStep,
    VSCodeExtensionsStep,
    XcodeCLTStep,
    karabiner_step,
    vscode_settings_step,
)

logger = logging.getLogger(__name__)


def build_steps(cfg: SetupConfig) -> List[Step]:
    # Order matters: later steps rely on brew being resolved by HomebrewStep.
    return [
        XcodeCLTStep(),
        HomebrewStep(),
        BrewBundleStep(),
        ImportDefaultsStep(),
        InstallArchiveAppStep(cfg.archive_app.app_name),
        karabiner_step(),
        vscode_settings_step(),
        VSCodeExtensionsStep(),
    ]


def run(ctx: SetupCtx, steps: Optional[List[Step]] = None) -> PipelineResult:
    """Run the provisioning pipeline for an already-built context."""

    result = run_pipeline(ctx=ctx, steps=steps if steps is not None else build_steps(ctx.cfg))
    if result.exit_code == 0:
        if result.warned_steps:
            logger.info("Completed with warnings in: %s", ", ".join(result.warned_steps))
        logger.info("All automated steps completed.")
    return result


def _error(msg: str) -> int:
    logger.debug("ERROR: %s", msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="mac-setup", description="Provision a fresh macOS workstation.")
    p.add_argument("--config", default=None, help="Path to setup.yaml (default: repo root)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--dry-run", action="store_true", help="Log commands and copies without running them")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log)

    if platform.system() != "Darwin":
        return _error("This program is intended for macOS only.")

    try:
        cfg = load_setup_config(args.config)
    except (OSError, ValueError) as e:
        return _error(f"Could not load configuration: {e}")

    ctx = SetupCtx(cfg=cfg, dry_run=bool(args.dry_run))
    result = run(ctx)
    if result.exit_code != 0:
        return _error(result.error or "provisioning failed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
