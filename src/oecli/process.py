# process.py
# Small wrapper around subprocess.
# Work items never call subprocess directly; they go through run() / cmd()
# so a missing binary or a non-zero exit always ends up as a StepError.

from __future__ import annotations

import subprocess
from typing import List, Optional

from .errors import StepError

TOOL_HINTS = {
    "gh": "Install the GitHub CLI (https://cli.github.com) and run `gh auth login`.",
    "npm": "Install Node.js (includes npm) or fix PATH.",
    "task": "Install go-task (https://taskfile.dev) or fix PATH.",
    "age-keygen": "Install age (https://github.com/FiloSottile/age) or fix PATH.",
    "sh": "A POSIX shell is required to run shell steps.",
}


def run(args: List[str], *, cwd: Optional[str] = None) -> subprocess.CompletedProcess:
    """
    Execute a command and return the finished process.

    Output is captured as UTF-8 text, undecodable bytes are replaced.
    A non-zero exit code is NOT an error here, callers inspect returncode
    themselves. A command that cannot be started
    at all raises StepError with an install hint.
    """
    try:
        return subprocess.run(
            args,
            cwd=cwd,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
        )
    except FileNotFoundError as e:
        tool = args[0]
        hint = TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")
        raise StepError(f"Failed to run `{' '.join(args)}`. Error: {e}\nHint: {hint}") from e
    except OSError as e:
        raise StepError(f"Failed to run `{' '.join(args)}`. Error: {e}") from e


def cmd(args: List[str], name: str | None = None, *, cwd: Optional[str] = None) -> str:
    """
    Run a command that must succeed.

    Returns:
        A short completion message, suitable as the result of execute().

    Raises:
        StepError carrying stderr when the command exits non-zero.
    """
    name = name or " ".join(args)
    proc = run(args, cwd=cwd)
    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()[-4000:]
        raise StepError(f"Error running `{name}`. stderr: {stderr}")
    return f"Completed running `{name}`."
