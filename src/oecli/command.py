# command.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .dsl import ExecutorProperties
from .events import EventHandler
from .runner import run_plan
from .settings import Settings, load_settings
from .ui.log_handler import ConsoleLogEventHandler
from .ui.progress import ProgressBarsEventHandler


def make_event_handler(settings: Settings) -> EventHandler:
    """Progress bars by default, plain console lines with output=console."""
    if settings.output == "console":
        return ConsoleLogEventHandler(settings.log_level)
    return ProgressBarsEventHandler(settings.log_level)


class CLIStepExecutor(ABC):
    """
    A command made of steps.

    Implementations only describe WHICH steps run and in WHAT order:

        class MyCommand(CLIStepExecutor):
            def set_properties(self, props):
                return props.run_parallel([step1, step2]).then_run(step3)

    execute() takes care of the event handler and the executor.
    """

    @abstractmethod
    def set_properties(self, props: ExecutorProperties) -> ExecutorProperties:
        ...

    def execute(
        self,
        settings: Optional[Settings] = None,
        event_handler: Optional[EventHandler] = None,
    ) -> None:
        """Run the command's steps. Raises StepFailure on the first failing step."""
        settings = settings or load_settings()
        props = self.set_properties(ExecutorProperties())
        handler = event_handler or make_event_handler(settings)
        with handler:
            run_plan(props, handler, max_workers=settings.max_workers)
