# step_workflows/age.py
from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import StepError
from ..model import ShouldRunResult, WorkItem
from ..process import cmd


class AgeKey(WorkItem):
    """Generate an age key for a repository and install it under key_dir."""

    title = "Set up age key for repo."
    description = "Sets up the age key and installs it to the home directory."

    def __init__(self, name: str, key_dir: str | Path):
        self.name = name
        self.key_dir = Path(key_dir)

    @property
    def key_path(self) -> Path:
        return self.key_dir / f"{self.name}.txt"

    def should_run(self) -> ShouldRunResult:
        if self.key_path.exists():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        cmd(["age-keygen", "-o", "age.agekey"], "age-keygen")
        try:
            self.key_dir.mkdir(parents=True, exist_ok=True)
            shutil.move("age.agekey", str(self.key_path))
        except OSError as e:
            raise StepError(f"Failed to install age key to {self.key_path}. Error: {e}") from e
        return f"Age key generated and moved to {self.key_path}"
