from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_file(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    """Copy src over dst, creating dst's parent directories. Last write wins."""

    if not src.is_file():
        raise FileNotFoundError(str(src))

    if dry_run:
        logger.info("Would copy %s -> %s", str(src), str(dst))
        return

    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
