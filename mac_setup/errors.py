from __future__ import annotations

from pathlib import Path
from typing import Optional


class SetupError(RuntimeError):
    """Base class for failures raised by provisioning steps."""


class FatalError(SetupError):
    """Aborts the pipeline. `remedy` tells the operator what to do before re-running."""

    def __init__(self, message: str, remedy: Optional[str] = None):
        self.message = message
        self.remedy = remedy
        super().__init__(f"{message} {remedy}" if remedy else message)


class StepWarning(SetupError):
    """Logged by the driver; the pipeline continues."""


class ManifestError(SetupError):
    def __init__(self, path: Path, line_no: int, line: str, reason: str):
        self.path = path
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"{path}:{line_no}: {reason}: {line.strip()!r}")
