"""Print step events to the console, filtered by a LogLevel."""

from __future__ import annotations

from typing import Optional

from ..events import End, Error, EventHandler, Skip, Start
from ..log import LogLevel
from ..model import StepDetails
from .console import Console, get_console


class ConsoleLogEventHandler(EventHandler):
    """
    One line (or a few) per step event.

      silent          nothing
      error, warning  failed steps only
      info            begin / end / skip of every step, failures
      verbose         like info, plus descriptions and step messages
    """

    def __init__(self, msg_level: LogLevel | str = LogLevel.INFO, console: Optional[Console] = None):
        self.msg_level = LogLevel.parse(msg_level)
        self.console = console or get_console()

    def step_start(self, step: StepDetails, event: Start) -> None:
        if self.msg_level is LogLevel.VERBOSE:
            self.console.print_lines(step.title, step.description, event.message)
        elif self.msg_level is LogLevel.INFO:
            self.console.print_lines(f"Begin: {step.title}", step.description)

    def step_end(self, step: StepDetails, event: End) -> None:
        if self.msg_level is LogLevel.VERBOSE:
            self.console.print_lines(f"{step.title} Completed", event.message)
        elif self.msg_level is LogLevel.INFO:
            self.console.print_lines(f"End: {step.title}")

    def step_skipped(self, step: StepDetails, event: Skip) -> None:
        if self.msg_level is LogLevel.VERBOSE:
            self.console.print_lines(f"{step.title}: {event.message}")
        elif self.msg_level is LogLevel.INFO:
            self.console.print_lines(f"progress: {step.title}: {event.message}")

    def step_error(self, step: StepDetails, event: Error) -> None:
        if self.msg_level is not LogLevel.SILENT:
            self.console.print_lines(f"Error: {step.title}", event.message)
