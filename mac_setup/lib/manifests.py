"""Typed parsers for the line-oriented manifests the pipeline consumes.

Both parsers raise FileNotFoundError when the file is absent and
ManifestError when it cannot be read as text. Individual lines are never
fatal: the Brewfile goes to `brew bundle` as a whole, and bad extension
lines are reported next to the identifiers that will be installed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..errors import ManifestError

BREWFILE_KINDS = ("tap", "brew", "cask", "mas", "vscode", "whalebrew")

_BREWFILE_LINE = re.compile(r"""^(?P<kind>[A-Za-z_]+)\b\s*(?:(?P<q>["'])(?P<name>[^"']*)(?P=q))?""")
_EXTENSION_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*\.[A-Za-z0-9][A-Za-z0-9._-]*(@[A-Za-z0-9._-]+)?$")


@dataclass(frozen=True)
class BrewEntry:
    kind: str
    name: str
    line_no: int


@dataclass(frozen=True)
class Brewfile:
    path: Path
    entries: List[BrewEntry]
    # Lines brew bundle understands but we don't count (cask_args, Ruby code, ...).
    other_lines: List[int] = field(default_factory=list)

    def names(self, kind: str) -> List[str]:
        return [e.name for e in self.entries if e.kind == kind]

    def summary(self) -> str:
        counts: Dict[str, int] = {}
        for e in self.entries:
            counts[e.kind] = counts.get(e.kind, 0) + 1
        parts = [f"{k}={counts[k]}" for k in BREWFILE_KINDS if k in counts]
        if self.other_lines:
            parts.append(f"other={len(self.other_lines)}")
        return ", ".join(parts) or "empty"


@dataclass(frozen=True)
class ExtensionList:
    path: Path
    ids: List[str]
    invalid: List[ManifestError] = field(default_factory=list)


def _read_lines(path: Path) -> List[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        raise ManifestError(path, 0, "", f"not UTF-8 text ({e.reason})") from e


def _strip_comment(line: str) -> str:
    # Brewfile comments start with '#'; quoted names never contain one.
    idx = line.find("#")
    return line if idx < 0 else line[:idx]


def parse_brewfile(path: Path) -> Brewfile:
    entries: List[BrewEntry] = []
    other: List[int] = []
    for line_no, raw in enumerate(_read_lines(path), start=1):
        line = _strip_comment(raw).strip()
        if not line:
            continue
        m = _BREWFILE_LINE.match(line)
        if m and m.group("kind") in BREWFILE_KINDS and m.group("name"):
            entries.append(BrewEntry(kind=m.group("kind"), name=m.group("name"), line_no=line_no))
        else:
            other.append(line_no)
    return Brewfile(path=path, entries=entries, other_lines=other)


def parse_extension_list(path: Path) -> ExtensionList:
    """One extension identifier (publisher.name[@version]) per line.

    Blank lines and `#` comments are skipped; anything else that is not an
    identifier lands in `invalid`.
    """

    ids: List[str] = []
    invalid: List[ManifestError] = []
    for line_no, raw in enumerate(_read_lines(path), start=1):
        ext = raw.strip()
        if not ext or ext.startswith("#"):
            continue
        if _EXTENSION_ID.match(ext):
            ids.append(ext)
        else:
            invalid.append(ManifestError(path, line_no, raw, "not an extension identifier"))
    return ExtensionList(path=path, ids=ids, invalid=invalid)
