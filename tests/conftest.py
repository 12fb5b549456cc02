from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from mac_setup.config import SetupConfig
from mac_setup.context import SetupCtx
from mac_setup.lib.command import CmdResult, CommandError
from mac_setup.lib.env import Paths

APP = "MouseJumpUtility.app"

Handler = Callable[[List[str]], Optional[int]]


class FakeRunner:
    """Stands in for run_cmd: records argv and answers from registered handlers.

    Handlers are keyed by (basename of argv[0], *leading args); the longest
    matching key wins. A handler returns an exit code (None means 0).
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self._handlers: Dict[Tuple[str, ...], Tuple[Handler, str]] = {}

    def on(self, *key: str, rc: int = 0, stdout: str = "", effect: Optional[Handler] = None) -> "FakeRunner":
        def handler(argv: List[str]) -> Optional[int]:
            if effect is not None:
                got = effect(argv)
                if got is not None:
                    return got
            return rc

        self._handlers[tuple(key)] = (handler, stdout)
        return self

    def _match(self, argv: List[str]):
        norm = [Path(argv[0]).name, *argv[1:]]
        for key in sorted(self._handlers, key=len, reverse=True):
            if norm[: len(key)] == list(key):
                return self._handlers[key]
        return None

    def __call__(self, argv, *, check=True, env=None, cwd=None, capture=True, dry_run=False) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        rc, stdout = 0, ""
        if not dry_run:
            found = self._match(argv)
            if found is not None:
                handler, stdout = found
                rc = handler(argv) or 0
        result = CmdResult(argv=argv, returncode=rc, stdout=stdout, stderr="" if rc == 0 else "boom")
        if check and rc != 0:
            raise CommandError(result)
        return result

    def commands(self, *key: str) -> List[List[str]]:
        return [c for c in self.calls if [Path(c[0]).name, *c[1:]][: len(key)] == list(key)]


def make_executable(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def tool_dir(tmp_path: Path) -> Path:
    d = tmp_path / "bin"
    for name in ("curl", "unzip", "code"):
        make_executable(d / name)
    return d


@pytest.fixture
def paths(tmp_path: Path) -> Paths:
    apps = tmp_path / "Applications"
    apps.mkdir()
    return Paths(
        home=tmp_path / "home",
        applications_dir=apps,
        brew_candidates=(
            tmp_path / "opt" / "homebrew" / "bin" / "brew",
            tmp_path / "usr" / "local" / "bin" / "brew",
        ),
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / "config" / "defaults").mkdir(parents=True)
    (root / "config" / "karabiner").mkdir(parents=True)
    (root / "config" / "vscode").mkdir(parents=True)
    (root / "Brewfile").write_text('tap "dimentium/autoraise"\nbrew "git"\ncask "alt-tab"\n', encoding="utf-8")
    (root / "config" / "karabiner" / "karabiner.json").write_text('{"profiles": []}\n', encoding="utf-8")
    (root / "config" / "vscode" / "settings.json").write_text('{"editor.fontSize": 14}\n', encoding="utf-8")
    (root / "config" / "vscode" / "extensions.txt").write_text(
        "ms-python.python\n\neamodio.gitlens\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def world(paths: Paths) -> FakeRunner:
    """A runner that behaves like a Mac with CLT installed and brew present."""

    make_executable(paths.brew_candidates[0])
    state = {"bundled": False}

    def bundle(argv: List[str]) -> None:
        state["bundled"] = True

    def curl(argv: List[str]) -> None:
        if "-o" in argv:
            Path(argv[argv.index("-o") + 1]).write_bytes(b"PK\x03\x04")

    def unzip(argv: List[str]) -> None:
        app = Path(argv[argv.index("-d") + 1]) / "MouseJumpUtility" / APP / "Contents"
        app.mkdir(parents=True)
        (app / "Info.plist").write_text("<plist/>", encoding="utf-8")

    def sudo_cp(argv: List[str]) -> None:
        src, dst = Path(argv[-2]), Path(argv[-1])
        shutil.copytree(src, dst / src.name)

    runner = FakeRunner()
    runner.on("xcode-select", "-p", rc=0)
    runner.on("brew", "--version", stdout="Homebrew 4.4.0\n")
    runner.on("brew", "bundle", "check", effect=lambda argv: 0 if state["bundled"] else 1)
    runner.on("brew", "bundle", "--file", effect=bundle)
    runner.on("curl", effect=curl)
    runner.on("unzip", effect=unzip)
    runner.on("sudo", "cp", effect=sudo_cp)
    return runner


@pytest.fixture
def make_ctx(repo: Path, paths: Paths, tool_dir: Path):
    def _make(runner: FakeRunner, *, raw: Optional[dict] = None, dry_run: bool = False) -> SetupCtx:
        return SetupCtx(
            cfg=SetupConfig(raw=raw or {}, root=repo),
            paths=paths,
            runner=runner,
            dry_run=dry_run,
            search_path=str(tool_dir),
        )

    return _make
