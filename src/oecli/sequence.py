# sequence.py
from __future__ import annotations

from typing import Iterable, List

from .errors import SchedulerError
from .model import Step, WorkItem, as_step


class StepSequence(Step):
    """
    An ordered list of batches. Steps inside one batch run concurrently,
    batches run one after another. A sequence is itself a Step and can be
    placed in any batch, including a batch of another sequence.

    Example:
        seq = (
            StepSequence("Set up repository", "Create, clone, install")
            .then_run(CreateTemplateRepo(name, template, public))
            .then_run(CloneRepo(name))
            .then_run_parallel([NpmInstall(name), CreateFile(f"{name}/app.toml")])
        )
        seq.num_steps()  # 4
    """

    def __init__(self, title: str, description: str = ""):
        super().__init__(title=title, description=description)
        self.steps: List[List[Step]] = []
        self._cur = 0

        # executor bookkeeping
        self.started = False
        self.pending: List[Step] = []

    # ---- building ----

    def set_steps(self, steps: Iterable[Step | WorkItem]) -> StepSequence:
        """Replace all batches with a single initial batch."""
        self.steps = [[as_step(s) for s in steps]]
        return self

    def then_run(self, step: Step | WorkItem) -> StepSequence:
        """Append a batch holding one step."""
        self.steps.append([as_step(step)])
        return self

    def then_run_parallel(self, steps: Iterable[Step | WorkItem]) -> StepSequence:
        """Append a batch of steps that run concurrently."""
        self.steps.append([as_step(s) for s in steps])
        return self

    # ---- cursor ----

    @property
    def cursor(self) -> int:
        return self._cur

    def has_next(self) -> bool:
        return self._cur < len(self.steps)

    def take_next_batch(self) -> List[Step]:
        if not self.has_next():
            raise SchedulerError(f"Sequence '{self.title}' has no batches left")
        batch = self.steps[self._cur]
        self._cur += 1
        return batch

    def num_steps(self) -> int:
        return sum(len(batch) for batch in self.steps)

    def remaining_steps(self) -> int:
        return sum(len(batch) for batch in self.steps[self._cur:])

    def __repr__(self) -> str:
        return f"StepSequence({self.title!r}, batches={len(self.steps)}, cursor={self._cur})"
