"""Plain text output of the oecli command line."""

from __future__ import annotations

import sys
import traceback
from typing import Optional, TextIO

from ..errors import StepFailure

RERUN_HINT = "Fix the problem and run the same command again; completed steps will be skipped."


class Console:
    """
    Everything oecli prints outside of progress bars goes through here.

    Regular output goes to `out` (stdout), problems to `err` (stderr).
    Streams are looked up on every call unless given explicitly, so
    redirected sys.stdout / sys.stderr are honoured.
    """

    def __init__(self, debug: bool = False, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.debug = debug
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    # ---- run ----

    def print_run_started(self, command: str) -> None:
        print(f"\nRUN STARTED: {command}\n", file=self.out)

    def print_run_finished(self, status: str, duration: Optional[float] = None) -> None:
        line = f"\nRUN FINISHED: {status}"
        if duration is not None:
            line += f" ({duration:.1f}s)"
        print(line, file=self.out)

    def print_lines(self, *lines: str) -> None:
        """Print each non-empty line (used by event handlers)."""
        for line in lines:
            if line:
                print(line, file=self.out)

    def print_info(self, message: str) -> None:
        print(message, file=self.out)

    # ---- problems ----

    def print_error(self, title: str, message: str, suggestion: Optional[str] = None) -> None:
        print(f"\nERROR: {title}", file=self.err)
        print(message, file=self.err)
        if suggestion:
            print(f"\n{suggestion}", file=self.err)

    def print_step_failure(self, failure: StepFailure) -> None:
        """
        Report the failure that stopped a run.

        In debug mode the failing step and its sequence are listed too.
        """
        print("\nERROR: Error has occurred", file=self.err)
        print(failure.message, file=self.err)
        if self.debug:
            print(f"  kind: {failure.kind}", file=self.err)
            print(f"  step: {failure.step}", file=self.err)
            print(f"  sequence: {failure.sequence}", file=self.err)
        print(f"\n{RERUN_HINT}", file=self.err)

    def print_exception(self, exc: BaseException) -> None:
        """Full traceback in debug mode, one line otherwise."""
        if self.debug:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=self.err)
        else:
            print(f"Error: {type(exc).__name__}: {exc}", file=self.err)

    def print_debug(self, message: str) -> None:
        if self.debug:
            print(f"[DEBUG] {message}", file=self.err)


# Module-wide console, replaced by the CLI once --debug is known
_console: Optional[Console] = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    global _console
    _console = console
