from __future__ import annotations

import sys
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

import pytest


# Ensure src/ is importable without an editable install
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from oecli.errors import StepError  # noqa: E402
from oecli.events import EndSequence, EventHandler, NewSequence  # noqa: E402
from oecli.model import ShouldRunResult, StepDetails, WorkItem  # noqa: E402
from oecli.ui.console import Console, set_console  # noqa: E402


class Tracker:
    """Shared by FakeItems of one test: execution order and peak concurrency."""

    def __init__(self):
        self._lock = threading.Lock()
        self.executed: List[str] = []
        self.running = 0
        self.peak = 0

    def enter(self, title: str) -> None:
        with self._lock:
            self.running += 1
            self.peak = max(self.peak, self.running)

    def leave(self, title: str) -> None:
        with self._lock:
            self.running -= 1
            self.executed.append(title)


class FakeItem(WorkItem):
    """
    Configurable work item.

      done         should_run() answers skip
      check_error  should_run() answers error(check_error)
      fail         execute() raises StepError(fail)
      raises       execute() raises this exception
      delay        seconds execute() sleeps
    """

    def __init__(
        self,
        title: str,
        tracker: Optional[Tracker] = None,
        *,
        done: bool = False,
        check_error: Optional[str] = None,
        check_raises: Optional[Exception] = None,
        fail: Optional[str] = None,
        raises: Optional[Exception] = None,
        delay: float = 0.0,
        message: str = "ok",
    ):
        self.title = title
        self.description = f"fake {title}"
        self.tracker = tracker or Tracker()
        self.done = done
        self.check_error = check_error
        self.check_raises = check_raises
        self.fail = fail
        self.raises = raises
        self.delay = delay
        self.message = message
        self.should_run_calls = 0
        self.execute_calls = 0

    def should_run(self) -> ShouldRunResult:
        self.should_run_calls += 1
        if self.check_raises is not None:
            raise self.check_raises
        if self.check_error is not None:
            return ShouldRunResult.error(self.check_error)
        if self.done:
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        self.execute_calls += 1
        self.tracker.enter(self.title)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.raises is not None:
                raise self.raises
            if self.fail is not None:
                raise StepError(self.fail)
            return self.message
        finally:
            self.tracker.leave(self.title)


class RecordingHandler(EventHandler):
    """Keeps every event; flags any overlapping handle_event() calls."""

    def __init__(self):
        self.events: List[Tuple[Optional[StepDetails], object]] = []
        self.overlapped = False
        self.closed = False
        self._busy = False

    def handle_event(self, step, event) -> None:
        if self._busy:
            self.overlapped = True
        self._busy = True
        try:
            self.events.append((step, event))
            time.sleep(0.001)
        finally:
            self._busy = False

    def close(self) -> None:
        self.closed = True

    # ---- queries ----

    def of_type(self, event_type) -> List[Tuple[Optional[StepDetails], object]]:
        return [(s, e) for s, e in self.events if isinstance(e, event_type)]

    def titles(self, event_type) -> List[str]:
        return [s.title for s, _ in self.of_type(event_type)]

    def index(self, event_type, title: str) -> int:
        for i, (step, event) in enumerate(self.events):
            if isinstance(event, event_type):
                if event_type in (NewSequence, EndSequence):
                    if event.sequence_name == title:
                        return i
                elif step is not None and step.title == title:
                    return i
        raise AssertionError(f"no {event_type.__name__} event for {title!r}")

    def sequence_names(self, event_type) -> List[str]:
        return [e.sequence_name for _, e in self.of_type(event_type)]


@pytest.fixture
def tracker() -> Tracker:
    return Tracker()


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture(autouse=True)
def plain_console():
    set_console(Console())
    yield
    set_console(Console())
