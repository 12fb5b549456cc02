from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

from .errors import FatalError, StepWarning

if TYPE_CHECKING:
    from .context import SetupCtx

logger = logging.getLogger(__name__)


class FailurePolicy(enum.Enum):
    FATAL = "fatal"
    WARN = "warn"


class Precondition(enum.Enum):
    SATISFIED = "satisfied"
    UNSATISFIED = "unsatisfied"
    FATAL = "fatal"


@dataclass(frozen=True)
class Check:
    status: Precondition
    reason: str = ""
    remedy: Optional[str] = None

    @classmethod
    def satisfied(cls, reason: str) -> "Check":
        return cls(Precondition.SATISFIED, reason)

    @classmethod
    def unsatisfied(cls, reason: str = "") -> "Check":
        return cls(Precondition.UNSATISFIED, reason)

    @classmethod
    def fatal(cls, reason: str, remedy: Optional[str] = None) -> "Check":
        return cls(Precondition.FATAL, reason, remedy)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    title: str
    policy: FailurePolicy

    def check(self, ctx: "SetupCtx") -> Check:
        ...

    def run(self, ctx: "SetupCtx") -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    warned_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed_step else 0


def run_pipeline(*, ctx: "SetupCtx", steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; stop at the first fatal failure."""

    result = PipelineResult()

    for index, step in enumerate(steps, start=1):
        logger.info("==> [%d] %s", index, step.title)

        check = step.check(ctx)
        if check.status is Precondition.SATISFIED:
            logger.info("    %s (skip)", check.reason or "Already done")
            result.skipped_steps.append(step.step_id)
            continue
        if check.status is Precondition.FATAL:
            _fail(result, step, FatalError(check.reason, check.remedy))
            break

        try:
            step.run(ctx)
        except FatalError as e:
            _fail(result, step, e)
            break
        except StepWarning as e:
            _warn(result, step, e)
            continue
        except Exception as e:
            if step.policy is FailurePolicy.WARN:
                _warn(result, step, e)
                continue
            logger.debug("Step %s raised", step.step_id, exc_info=True)
            _fail(result, step, e)
            break

        result.ran_steps.append(step.step_id)

    return result


def _warn(result: PipelineResult, step: Step, e: Exception) -> None:
    logger.warning("    WARN: %s", e)
    result.warned_steps.append(step.step_id)


def _fail(result: PipelineResult, step: Step, e: Exception) -> None:
    logger.error("    Step %s failed: %s", step.step_id, e)
    result.failed_step = step.step_id
    result.error = f"[{step.step_id}] {e}"
