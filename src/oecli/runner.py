# runner.py
from __future__ import annotations

import runpy
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Deque, List, NoReturn, Optional

from .errors import SchedulerError, StepError, StepFailure, WorkflowLoadError
from .events import (
    MAIN_SEQUENCE,
    SKIPPED_MESSAGE,
    End,
    EndSequence,
    Error,
    EventHandler,
    NewSequence,
    Skip,
    Start,
    StepEvent,
)
from .model import ItemStep, RunStatus, ShouldRunResult, Step, StepDetails
from .sequence import StepSequence

# Top level batches run in the queue order given by the run plan:
#
#   [B0] -> [B1] -> [B2]
#
# Every step of a batch runs on its own worker. A sequence found in a batch
# runs ONE of its batches and comes back as a continuation; continuations are
# pushed to the FRONT of the queue so the sequence drains before B1 starts.


class StepExecutor:
    """
    Drains a run plan batch by batch and publishes lifecycle events.

    Usage:
        StepExecutor(handler).build_steps(properties).run()

    run() raises StepFailure for the first failing step. Steps already
    running in the same batch are allowed to finish; no later batch starts.
    """

    def __init__(self, event_handler: EventHandler, *, max_workers: int | None = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.event_handler = event_handler
        self.max_workers = max_workers
        self.steps: List[List[Step]] = []
        self._lock = threading.Lock()

    def build_steps(self, properties) -> StepExecutor:
        """Take the run plan out of an ExecutorProperties (see dsl.py)."""
        self.steps = properties.get_steps()
        return self

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> None:
        queue: Deque[List[Step]] = deque(self.steps)
        self.steps = []

        num_steps = sum(len(batch) for batch in queue)
        self._publish(None, NewSequence(length=num_steps, sequence_name=MAIN_SEQUENCE))

        while queue:
            batch = queue.popleft()
            continuations = self._run_batch(batch, MAIN_SEQUENCE)

            # depth first: unfinished sequences drain before the next queued batch
            if continuations:
                queue.appendleft(continuations)

        self._publish(None, EndSequence(sequence_name=MAIN_SEQUENCE))

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def _pool_size(self, batch_size: int) -> int:
        if self.max_workers is None:
            return batch_size
        return max(1, min(self.max_workers, batch_size))

    def _run_batch(self, batch: List[Step], sequence_name: str) -> List[Step]:
        """
        Run every step of the batch concurrently and wait for all of them.

        Returns the continuations (sequences with batches left).
        Raises the first StepFailure seen, after the whole batch finished.
        """
        if not batch:
            return []

        continuations: List[Step] = []
        failure: Optional[StepFailure] = None

        with ThreadPoolExecutor(max_workers=self._pool_size(len(batch))) as pool:
            futures = {pool.submit(self._process_step, step, sequence_name): step for step in batch}

            for future in as_completed(futures):
                try:
                    continuation = future.result()
                except StepFailure as e:
                    if failure is None:
                        failure = e
                    continue

                if continuation is not None:
                    continuations.append(continuation)

        if failure is not None:
            raise failure

        return continuations

    def _process_step(self, step: Step, sequence_name: str) -> Optional[Step]:
        if isinstance(step, ItemStep):
            self._execute_step_item(step, sequence_name)
            return None
        if isinstance(step, StepSequence):
            return self._process_sequence(step, sequence_name)
        raise SchedulerError(f"Unknown step type: {type(step).__name__}")

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _process_sequence(self, sequence: StepSequence, parent_name: str) -> Optional[Step]:
        """
        Run the next batch of a sequence.

        Nested sequences left unfinished by that batch are kept on the
        sequence (sequence.pending) and run before its following batch.
        """
        if not sequence.started:
            sequence.started = True
            self._publish(None, NewSequence(length=sequence.num_steps(), sequence_name=sequence.title))

        if sequence.pending:
            batch, sequence.pending = sequence.pending, []
            sequence.pending = self._run_batch(batch, sequence.title)
        elif sequence.has_next():
            sequence.pending = self._run_batch(sequence.take_next_batch(), sequence.title)

        if sequence.pending or sequence.has_next():
            return sequence

        self._publish(None, EndSequence(sequence_name=sequence.title, parent_name=parent_name))
        return None

    # ------------------------------------------------------------------
    # Work items
    # ------------------------------------------------------------------

    def _execute_step_item(self, step: ItemStep, sequence_name: str) -> None:
        details = step.details
        self._publish(details, Start(sequence_name=sequence_name))

        work_item = step.take()

        try:
            should_run = work_item.should_run()
        except Exception as e:  # a work item must never take the run down
            should_run = ShouldRunResult.error(f"{type(e).__name__}: {e}")

        if should_run.status is RunStatus.SKIP:
            self._publish(details, Skip(message=SKIPPED_MESSAGE, sequence_name=sequence_name))
            return

        if should_run.status is RunStatus.ERROR:
            message = f"Unexpected error processing step.\n{should_run.message}"
            self._publish(details, Error(message=message, sequence_name=sequence_name))
            raise StepFailure(kind="check", step=details.title, sequence=sequence_name, message=should_run.message)

        try:
            message = work_item.execute()
        except StepError as e:
            self._fail(details, sequence_name, e.message)
        except Exception as e:
            self._fail(details, sequence_name, f"{type(e).__name__}: {e}")

        self._publish(details, End(message=message or "", sequence_name=sequence_name))

    def _fail(self, details: StepDetails, sequence_name: str, message: str) -> NoReturn:
        self._publish(details, Error(message=message, sequence_name=sequence_name))
        raise StepFailure(kind="execution", step=details.title, sequence=sequence_name, message=message)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _publish(self, step: Optional[StepDetails], event: StepEvent) -> None:
        # one event at a time, whatever thread it comes from
        with self._lock:
            self.event_handler.handle_event(step, event)


def run_plan(properties, event_handler: EventHandler, *, max_workers: int | None = None) -> None:
    """Functional entry point: run an ExecutorProperties plan to completion."""
    StepExecutor(event_handler, max_workers=max_workers).build_steps(properties).run()


# ----------------------------------------------------------------------
# Workflow loading (local file)
# ----------------------------------------------------------------------

def load_workflow(path: str | Path):
    """
    Load a run plan from a python file path.

    The file must define either:
      - workflow() -> ExecutorProperties
      - PLAN = ExecutorProperties(...)

    Returns:
      ExecutorProperties
    """
    from .dsl import ExecutorProperties

    wf_path = Path(path).expanduser().resolve()
    if not wf_path.exists():
        raise WorkflowLoadError(f"Workflow file not found: {wf_path}")
    if wf_path.suffix != ".py":
        raise WorkflowLoadError(f"Workflow must be a .py file, got: {wf_path.name}")

    module_name = f"oecli_workflow_{wf_path.stem}"
    globals_dict = runpy.run_path(str(wf_path), run_name=module_name)

    plan = None
    if "workflow" in globals_dict and callable(globals_dict["workflow"]):
        plan = globals_dict["workflow"]()
    elif "PLAN" in globals_dict:
        plan = globals_dict["PLAN"]

    if not isinstance(plan, ExecutorProperties):
        raise WorkflowLoadError(
            "Workflow must return/define an ExecutorProperties. "
            "Define workflow() -> ExecutorProperties or PLAN = ExecutorProperties()..."
        )

    return plan
