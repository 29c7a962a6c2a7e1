# step_workflows/shell.py
from __future__ import annotations

from pathlib import Path

from ..errors import StepError
from ..model import ShouldRunResult, WorkItem
from ..process import run


class ShellItem(WorkItem):
    """
    Run a shell command.

    If `creates` is given the command is considered done once that path
    exists, which makes the step skippable on a re-run. A relative
    `creates` path is resolved against `cwd`, like the command itself.
    """

    def __init__(
        self,
        title: str,
        cmd: str,
        *,
        creates: str | None = None,
        cwd: str | None = None,
        description: str = "",
    ):
        self.title = title
        self.cmd = cmd
        self.creates = creates
        self.cwd = cwd
        self.description = description or f"Runs `{cmd}`"

    @property
    def created_path(self) -> Path | None:
        if self.creates is None:
            return None
        return Path(self.cwd or ".") / self.creates

    def should_run(self) -> ShouldRunResult:
        if self.cwd is not None and not Path(self.cwd).is_dir():
            return ShouldRunResult.error(f"Working directory not found: {self.cwd}")
        if self.created_path is not None and self.created_path.exists():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        proc = run(["sh", "-c", self.cmd], cwd=self.cwd)
        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()[-4000:]
            raise StepError(f"`{self.cmd}` failed (exit={proc.returncode}).\n{stderr}")
        return (proc.stdout or "").strip()[-4000:] or f"Completed running `{self.cmd}`."
