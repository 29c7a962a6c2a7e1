# log.py
from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """How much the console reports about a run."""

    SILENT = "silent"     # print nothing
    ERROR = "error"       # only steps that failed
    WARNING = "warning"   # steps that possibly contain errors
    INFO = "info"         # progress of all steps
    VERBOSE = "verbose"   # everything each step reports

    @classmethod
    def parse(cls, value: str | LogLevel) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown log level {value!r}. Choose one of: {choices}") from None

    @classmethod
    def choices(cls) -> list[str]:
        return [level.value for level in cls]
