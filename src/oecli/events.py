# events.py
"""
Lifecycle events published by the StepExecutor and the handler contract
that consumes them.

Sequence events (NewSequence, EndSequence) carry no step details, step
events (Start, End, Skip, Error) are always published together with the
StepDetails of the step they are about.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .model import StepDetails

MAIN_SEQUENCE = "main"
SKIPPED_MESSAGE = "Skipped. Already completed."


@dataclass(frozen=True)
class NewSequence:
    length: int
    sequence_name: str


@dataclass(frozen=True)
class EndSequence:
    sequence_name: str
    parent_name: str = ""


@dataclass(frozen=True)
class Start:
    sequence_name: str
    message: str = ""


@dataclass(frozen=True)
class End:
    message: str
    sequence_name: str


@dataclass(frozen=True)
class Skip:
    message: str
    sequence_name: str


@dataclass(frozen=True)
class Error:
    message: str
    sequence_name: str


StepEvent = Union[NewSequence, EndSequence, Start, End, Skip, Error]


class EventHandler:
    """
    Receives every lifecycle event of a run.

    The executor calls handle_event() from worker threads but never from
    two threads at once. Subclasses override the hooks they care about.
    """

    def handle_event(self, step: Optional[StepDetails], event: StepEvent) -> None:
        if isinstance(event, NewSequence):
            self.sequence_start(event)
            return
        if isinstance(event, EndSequence):
            self.sequence_end(event)
            return

        if step is None:
            raise ValueError(f"{type(event).__name__} event published without step details")

        if isinstance(event, Start):
            self.step_start(step, event)
        elif isinstance(event, End):
            self.step_end(step, event)
        elif isinstance(event, Skip):
            self.step_skipped(step, event)
        elif isinstance(event, Error):
            self.step_error(step, event)
        else:
            raise TypeError(f"Unknown event: {event!r}")

    def sequence_start(self, event: NewSequence) -> None:
        pass

    def sequence_end(self, event: EndSequence) -> None:
        pass

    def step_start(self, step: StepDetails, event: Start) -> None:
        pass

    def step_end(self, step: StepDetails, event: End) -> None:
        pass

    def step_skipped(self, step: StepDetails, event: Skip) -> None:
        pass

    def step_error(self, step: StepDetails, event: Error) -> None:
        pass

    def close(self) -> None:
        """Release whatever the handler renders to. Called once after the run."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
