# commands/workflow.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..command import CLIStepExecutor
from ..dsl import ExecutorProperties
from ..runner import load_workflow


@dataclass
class WorkflowFile(CLIStepExecutor):
    """Run the plan defined by a python workflow file (see runner.load_workflow)."""
    path: Path

    def set_properties(self, props: ExecutorProperties) -> ExecutorProperties:
        return load_workflow(self.path)
