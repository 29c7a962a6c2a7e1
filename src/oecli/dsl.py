# dsl.py
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from .model import ItemStep, ShouldRunResult, Step, WorkItem, as_step
from .sequence import StepSequence
from .step_workflows.shell import ShellItem


# ---------------------------------------------------------------------
# Run plan builder
# ---------------------------------------------------------------------

class ExecutorProperties:
    """
    Describes which steps a command runs and in which order.

    Example:
        props = (
            ExecutorProperties()
            .run_parallel([step1, step2])   # first batch, concurrent
            .then_run(step3)                # after step1 and step2
            .then_run(step4)
        )
    """

    def __init__(self):
        self._steps: List[List[Step]] = []

    def run(self, step: Step | WorkItem) -> ExecutorProperties:
        """Set the step to be run first (replaces any earlier batches)."""
        self._steps = [[as_step(step)]]
        return self

    def run_parallel(self, steps: Iterable[Step | WorkItem]) -> ExecutorProperties:
        """Set several steps to run first, in parallel (replaces any earlier batches)."""
        self._steps = [[as_step(s) for s in steps]]
        return self

    def then_run(self, step: Step | WorkItem) -> ExecutorProperties:
        """Add a step that runs after the previous batch completed."""
        self._steps.append([as_step(step)])
        return self

    def then_run_parallel(self, steps: Iterable[Step | WorkItem]) -> ExecutorProperties:
        """Add several steps that run in parallel after the previous batch completed."""
        self._steps.append([as_step(s) for s in steps])
        return self

    def num_steps(self) -> int:
        return sum(len(batch) for batch in self._steps)

    def get_steps(self) -> List[List[Step]]:
        """Hand the run plan over; the properties are empty afterwards."""
        steps, self._steps = self._steps, []
        return steps


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

class CallableItem(WorkItem):
    """WorkItem built from plain callables (see task())."""

    def __init__(
        self,
        title: str,
        fn: Callable[[], Optional[str]],
        *,
        check: Callable[[], bool] | None = None,
        description: str = "",
    ):
        self.title = title
        self.description = description
        self._fn = fn
        self._check = check

    def should_run(self) -> ShouldRunResult:
        # check() returns True when the work is already done
        if self._check is not None and self._check():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        return self._fn() or ""


def item(work_item: WorkItem) -> ItemStep:
    return ItemStep(work_item)


def task(
    title: str,
    fn: Callable[[], Optional[str]],
    *,
    check: Callable[[], bool] | None = None,
    description: str = "",
) -> ItemStep:
    """Wrap a function as a step. `check` returning True skips the step."""
    return ItemStep(CallableItem(title, fn, check=check, description=description))


def sh(
    title: str,
    cmd: str,
    *,
    creates: str | None = None,
    cwd: str | None = None,
    description: str = "",
) -> ItemStep:
    """
    Create a shell step running in `cwd` (default: the current directory).

    Skipped when the `creates` path already exists; a relative `creates`
    is resolved against `cwd`.
    """
    return ItemStep(ShellItem(title, cmd, creates=creates, cwd=cwd, description=description))


def sequence(
    title: str,
    *batches: Step | WorkItem | Iterable[Step | WorkItem],
    description: str = "",
) -> StepSequence:
    """
    Functional sequence builder. Each positional batch is either a single
    step or a list of steps to run in parallel:

        sequence("Set up", create, clone, [install, config], description="New repo")
    """
    seq = StepSequence(title, description)
    for batch in batches:
        if isinstance(batch, (Step, WorkItem)):
            seq.then_run(batch)
        else:
            seq.then_run_parallel(batch)
    return seq
