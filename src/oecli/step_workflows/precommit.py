# step_workflows/precommit.py
from __future__ import annotations

from enum import Enum

from ..model import ShouldRunResult, WorkItem
from ..process import cmd


class PreCommitCommand(Enum):
    INIT = "precommit:init"
    UPDATE = "precommit:update"


class PreCommit(WorkItem):
    """Set up the pre-commit hooks that come with a repository (via go-task)."""

    def __init__(self, command: PreCommitCommand, path: str):
        self.command = command
        self.path = path
        self.title = f"Running task {command.value}"
        self.description = f"Runs the pre-commit {command.value} command"

    def should_run(self) -> ShouldRunResult:
        return ShouldRunResult.ok()

    def execute(self) -> str:
        cmd(["task", self.command.value], f"task {self.command.value}", cwd=self.path)
        return f"Running `task {self.command.value}`"
