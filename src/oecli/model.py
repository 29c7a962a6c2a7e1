# model.py
from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from .errors import SchedulerError


# ----------------------------------------------------------------------
# Work items
# ----------------------------------------------------------------------

class RunStatus(Enum):
    RUN = "run"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class ShouldRunResult:
    """Answer of WorkItem.should_run()."""
    status: RunStatus
    message: str = ""

    @classmethod
    def ok(cls) -> ShouldRunResult:
        return cls(RunStatus.RUN)

    @classmethod
    def skip(cls) -> ShouldRunResult:
        """The effect of the item is already present."""
        return cls(RunStatus.SKIP)

    @classmethod
    def error(cls, message: str) -> ShouldRunResult:
        """The check itself failed; treated like a failed execute()."""
        return cls(RunStatus.ERROR, message)


class WorkItem(ABC):
    """
    Atomic unit of work with an idempotency check.

    The executor calls should_run() exactly once and then, only for
    RunStatus.RUN, execute() exactly once. execute() returns a short
    message on success and raises StepError on failure.
    """

    title: str = ""
    description: str = ""

    @abstractmethod
    def should_run(self) -> ShouldRunResult:
        ...

    @abstractmethod
    def execute(self) -> str:
        ...


# ----------------------------------------------------------------------
# Steps
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class StepId:
    """Random identifier, only ever compared for equality."""
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new_random(cls) -> StepId:
        return cls()

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class StepDetails:
    """What an event handler gets to know about the step behind an event."""
    title: str
    description: str = ""


class Step:
    """
    Either an ItemStep or a StepSequence (see sequence.py).

    Identity and equality are the step_id of the concrete variant.
    """

    def __init__(self, title: str, description: str = ""):
        self.step_id = StepId.new_random()
        self.details = StepDetails(title=title, description=description)

    @property
    def title(self) -> str:
        return self.details.title

    @property
    def description(self) -> str:
        return self.details.description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Step):
            return NotImplemented
        return self.step_id == other.step_id

    def __hash__(self) -> int:
        return hash(self.step_id)


class ItemStep(Step):
    """A Step wrapping a single WorkItem. The item can be taken only once."""

    def __init__(self, work_item: WorkItem):
        super().__init__(
            title=getattr(work_item, "title", "") or type(work_item).__name__,
            description=getattr(work_item, "description", "") or "",
        )
        self._item: WorkItem | None = work_item

    @property
    def consumed(self) -> bool:
        return self._item is None

    def take(self) -> WorkItem:
        if self._item is None:
            raise SchedulerError(f"Step '{self.title}' ({self.step_id}) was already executed")
        item, self._item = self._item, None
        return item

    def __repr__(self) -> str:
        return f"ItemStep({self.title!r})"


def as_step(step: Step | WorkItem) -> Step:
    """Accept a Step or a bare WorkItem wherever a step is expected."""
    if isinstance(step, Step):
        return step
    if isinstance(step, WorkItem):
        return ItemStep(step)
    raise TypeError(f"Expected a Step or WorkItem, got {type(step).__name__}")
