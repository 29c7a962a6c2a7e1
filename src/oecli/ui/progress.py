"""One progress bar per sequence, rendered with rich."""

from __future__ import annotations

from typing import Dict, Optional

from rich.console import Console as RichConsole
from rich.progress import BarColumn, Progress, TaskID, TextColumn

from ..events import End, EndSequence, Error, EventHandler, NewSequence, Skip, Start
from ..log import LogLevel
from ..model import StepDetails


class ProgressBarsEventHandler(EventHandler):
    """
    Tracks every sequence of a run with its own bar.

    Bars are keyed by sequence name. A sequence is announced again each time
    the executor comes back to it, only the first announcement creates a bar.
    Errors are not rendered here; the caller of the run reports them.

    Use as a context manager so the live display is stopped:

        with ProgressBarsEventHandler(LogLevel.INFO) as handler:
            run_plan(props, handler)
    """

    def __init__(self, msg_level: LogLevel | str = LogLevel.INFO, *, console: Optional[RichConsole] = None):
        self.msg_level = LogLevel.parse(msg_level)
        self.progress = Progress(
            TextColumn("[{task.completed:>4.0f}/{task.total:<4.0f}]"),
            BarColumn(bar_width=20),
            TextColumn("{task.description}"),
            console=console,
        )
        self.progress_bars: Dict[str, TaskID] = {}
        self._started = False

    @property
    def enabled(self) -> bool:
        return self.msg_level is not LogLevel.SILENT

    # ---- sequences ----

    def sequence_start(self, event: NewSequence) -> None:
        if not self.enabled or event.sequence_name in self.progress_bars:
            return
        if not self._started:
            self.progress.start()
            self._started = True
        self.progress_bars[event.sequence_name] = self.progress.add_task(
            event.sequence_name,
            total=event.length,
        )

    def sequence_end(self, event: EndSequence) -> None:
        if not self.enabled:
            return
        task_id = self.progress_bars.get(event.sequence_name)
        if task_id is not None:
            task = next(t for t in self.progress.tasks if t.id == task_id)
            self.progress.update(task_id, completed=task.total, description=event.sequence_name)
        # a finished nested sequence counts as one step of its parent
        parent_id = self.progress_bars.get(event.parent_name)
        if parent_id is not None:
            self.progress.advance(parent_id)

    # ---- steps ----

    def step_start(self, step: StepDetails, event: Start) -> None:
        task_id = self._task_for(event.sequence_name)
        if task_id is not None:
            self.progress.update(task_id, description=step.title)

    def step_skipped(self, step: StepDetails, event: Skip) -> None:
        task_id = self._task_for(event.sequence_name)
        if task_id is not None:
            self.progress.update(task_id, description=f"{step.title}: {event.message}", advance=1)

    def step_end(self, step: StepDetails, event: End) -> None:
        task_id = self._task_for(event.sequence_name)
        if task_id is not None:
            self.progress.advance(task_id)

    def step_error(self, step: StepDetails, event: Error) -> None:
        pass

    def _task_for(self, sequence_name: str) -> Optional[TaskID]:
        if not self.enabled:
            return None
        return self.progress_bars.get(sequence_name)

    # ---- lifecycle ----

    def close(self) -> None:
        if self._started:
            self.progress.stop()
            self._started = False
