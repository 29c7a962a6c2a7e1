# errors.py
from __future__ import annotations

from dataclasses import dataclass


class OecliError(Exception):
    """Base class for every error raised by oecli itself."""


class StepError(OecliError):
    """
    Raised by WorkItem.execute() when the item could not produce its effect.

    The message is what ends up in the Error event and, if it is the first
    failure of a run, in the run result.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SchedulerError(OecliError):
    """An internal invariant of the executor was broken (programming error)."""


class WorkflowLoadError(OecliError):
    """A workflow file could not be turned into a run plan."""


@dataclass(eq=False)
class StepFailure(OecliError):
    """
    First fatal failure of a run.

    kind:
      - "check"      should_run() returned an error
      - "execution"  execute() failed
    """
    kind: str
    step: str
    sequence: str
    message: str

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        lines = [f"{self.kind} failure: {self.message}", f"step={self.step}"]
        if self.sequence:
            lines.append(f"sequence={self.sequence}")
        return "\n".join(lines)
