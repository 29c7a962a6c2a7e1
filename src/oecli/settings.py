# settings.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .log import LogLevel

OUTPUTS = ("progress", "console")

DEFAULT_LOG_LEVEL = "info"
DEFAULT_OUTPUT = "progress"
DEFAULT_AGE_KEY_DIR = "~/.config/sops/age"


@dataclass(frozen=True)
class Settings:
    log_level: LogLevel = LogLevel.INFO
    output: str = DEFAULT_OUTPUT
    max_workers: Optional[int] = None
    age_key_dir: Path = Path(DEFAULT_AGE_KEY_DIR).expanduser()
    debug: bool = False

    def with_overrides(self, **changes) -> Settings:
        """Apply CLI values; None means 'not given, keep the environment value'."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _int_or_none(raw: str | None, name: str) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Read settings from the environment:

      OECLI_LOG_LEVEL    silent|error|warning|info|verbose (default info)
      OECLI_OUTPUT       progress|console (default progress)
      OECLI_MAX_WORKERS  cap on concurrent steps per batch (default: batch size)
      OECLI_AGE_KEY_DIR  where age keys are installed (default ~/.config/sops/age)
    """
    env = os.environ if env is None else env

    output = env.get("OECLI_OUTPUT", DEFAULT_OUTPUT).strip().lower()
    if output not in OUTPUTS:
        raise ValueError(f"OECLI_OUTPUT must be one of {OUTPUTS}, got {output!r}")

    return Settings(
        log_level=LogLevel.parse(env.get("OECLI_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        output=output,
        max_workers=_int_or_none(env.get("OECLI_MAX_WORKERS"), "OECLI_MAX_WORKERS"),
        age_key_dir=Path(env.get("OECLI_AGE_KEY_DIR", DEFAULT_AGE_KEY_DIR)).expanduser(),
    )
