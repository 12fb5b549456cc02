"""Fetch/unpack/locate/copy for apps shipped only as a release archive."""

from __future__ import annotations

import logging
import signal
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)

_CLEANUP_SIGNALS = tuple(
    s for s in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if s is not None
)


def _raise_exit(signum, frame):  # type: ignore[no-untyped-def]
    raise SystemExit(128 + signum)


@contextmanager
def scratch_dir(prefix: str = "mac-setup-") -> Iterator[Path]:
    """Temporary directory removed on every exit path.

    SIGTERM/SIGHUP are turned into SystemExit while it exists so the removal
    also runs when the process is asked to stop.
    """

    previous: Dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        for sig in _CLEANUP_SIGNALS:
            previous[sig] = signal.signal(sig, _raise_exit)
    try:
        with tempfile.TemporaryDirectory(prefix=prefix) as tmp:
            yield Path(tmp)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)  # type: ignore[arg-type]


def download(
    url: str,
    dest: Path,
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    runner(["curl", "-fsSL", url, "-o", str(dest)], env=env, dry_run=dry_run)


def unpack_zip(
    archive: Path,
    dest: Path,
    *,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> None:
    # unzip keeps the executable bits and symlinks inside .app bundles.
    runner(["unzip", "-q", str(archive), "-d", str(dest)], env=env, dry_run=dry_run)


def find_entry(root: Path, name: str, max_depth: int = 3) -> Optional[Path]:
    """Breadth-first search for `name` at most max_depth levels below root."""

    frontier = [root]
    for _ in range(max_depth):
        nxt = []
        for d in frontier:
            for child in sorted(d.iterdir()):
                if child.name == name:
                    return child
                if child.is_dir() and not child.is_symlink():
                    nxt.append(child)
        frontier = nxt
    return None


def privileged_copy(src: Path, dest_dir: Path, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    """The only place sudo is used."""

    runner(["sudo", "cp", "-R", str(src), str(dest_dir) + "/"], capture=False, dry_run=dry_run)
