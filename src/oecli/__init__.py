from .dsl import ExecutorProperties, item, sequence, sh, task
from .errors import SchedulerError, StepError, StepFailure
from .events import EventHandler
from .model import ItemStep, ShouldRunResult, Step, StepId, WorkItem
from .runner import StepExecutor, load_workflow, run_plan
from .sequence import StepSequence

__all__ = [
    "EventHandler",
    "ExecutorProperties",
    "ItemStep",
    "SchedulerError",
    "ShouldRunResult",
    "Step",
    "StepError",
    "StepExecutor",
    "StepFailure",
    "StepId",
    "StepSequence",
    "WorkItem",
    "item",
    "load_workflow",
    "run_plan",
    "sequence",
    "sh",
    "task",
]
