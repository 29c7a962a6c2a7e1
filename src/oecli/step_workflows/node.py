# step_workflows/node.py
from __future__ import annotations

from pathlib import Path

from ..model import ShouldRunResult, WorkItem
from ..process import cmd


class NpmInstall(WorkItem):
    """Run `npm install` inside a directory relative to the current one."""

    title = "Running npm install"
    description = "Will run 'npm install' in the newly provided directory"

    def __init__(self, path: str):
        self.path = path

    def should_run(self) -> ShouldRunResult:
        # npm install is idempotent on its own, it is always run
        if not Path(self.path).is_dir():
            return ShouldRunResult.error(f"Directory {self.path} does not exist.")
        return ShouldRunResult.ok()

    def execute(self) -> str:
        return cmd(["npm", "install"], "npm install", cwd=self.path)
