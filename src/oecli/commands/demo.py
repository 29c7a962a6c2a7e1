# commands/demo.py
from __future__ import annotations

import time
from dataclasses import dataclass

from ..command import CLIStepExecutor
from ..dsl import ExecutorProperties
from ..model import ShouldRunResult, WorkItem
from ..sequence import StepSequence


class SleepStep(WorkItem):
    """Does nothing but wait; used to watch the executor schedule."""

    def __init__(self, num: int, delay_ms: int):
        self.num = num
        self.delay_ms = delay_ms
        self.title = f"Demo Step ({num})"
        self.description = f"Will sleep for {delay_ms}ms"

    def should_run(self) -> ShouldRunResult:
        return ShouldRunResult.ok()

    def execute(self) -> str:
        time.sleep(self.delay_ms / 1000)
        return f"Slept {self.delay_ms}ms"


@dataclass
class Demo(CLIStepExecutor):
    """
    Parallel top-level steps followed by a sequence that nests another
    sequence next to a plain step.
    """
    delay_ms: int = 1000

    def set_properties(self, props: ExecutorProperties) -> ExecutorProperties:
        t = [SleepStep(i, self.delay_ms) for i in range(1, 12)]

        seq_two = (
            StepSequence("Demo sequence two")
            .then_run(t[4])
            .then_run(t[5])
            .then_run(t[6])
            .then_run(t[7])
        )

        seq_one = (
            StepSequence("Demo sequence one")
            .then_run(t[2])
            .then_run(t[3])
            .then_run_parallel([t[8], seq_two])
            .then_run(t[9])
            .then_run(t[10])
        )

        return props.run_parallel([t[0], t[1]]).then_run(seq_one)
