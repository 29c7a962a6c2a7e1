# step_workflows/filesystem.py
from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import StepError
from ..model import ShouldRunResult, WorkItem


class CreateFile(WorkItem):
    """Create an empty file. Skipped when the file is already there."""

    description = "Creates a new file at the destination path."

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.title = f"Creating File {file_path}"

    def should_run(self) -> ShouldRunResult:
        if Path(self.file_path).exists():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        try:
            Path(self.file_path).touch()
        except OSError as e:
            raise StepError(f"Failed to create {self.file_path}. Error: {e}") from e
        return f"Created {self.file_path}."


class CopyFile(WorkItem):
    """Copy src to dst unless dst already exists."""

    def __init__(self, src_file_path: str, dst_file_path: str):
        self.src_file_path = src_file_path
        self.dst_file_path = dst_file_path
        self.title = f"Copying File {src_file_path} to {dst_file_path}"
        self.description = f"Copies the source file {src_file_path} and creates the copy at {dst_file_path}."

    def should_run(self) -> ShouldRunResult:
        if Path(self.dst_file_path).exists():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        try:
            shutil.copyfile(self.src_file_path, self.dst_file_path)
        except OSError as e:
            raise StepError(
                f"Failed to copy {self.src_file_path} to {self.dst_file_path}. Error: {e}"
            ) from e
        return f"Copied {self.src_file_path} to {self.dst_file_path}."
