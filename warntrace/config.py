from __future__ import annotations

import functools
import os
import stat
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_WIDTH = 80
BLOCK_WIDTH = 60
PIPED_SCRIPT = "stack_trace.py"
TRUE_VALUES = ("true", "1", "yes", "on")


def stdin_is_pipe() -> bool:
    try:
        return stat.S_ISFIFO(os.fstat(sys.stdin.fileno()).st_mode)
    except (AttributeError, OSError, ValueError):
        return False


def terminal_width(environ: Mapping[str, str]) -> int:
    """Width from $COLUMNS, then the size of stderr, else 80."""
    columns = environ.get("COLUMNS", "")
    if columns.isdigit() and int(columns) > 0:
        return int(columns)
    try:
        return os.get_terminal_size(sys.stderr.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return DEFAULT_WIDTH


@dataclass(frozen=True)
class Config:
    """Process-wide settings, read once and shared by every report."""

    stack_trace: bool = True
    script: str = "unknown"
    width: int = DEFAULT_WIDTH
    piped: bool = False
    block_width: int = BLOCK_WIDTH

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        environ = os.environ if environ is None else environ
        piped = stdin_is_pipe()
        flag = environ.get("WARN_STACK_TRACE", "true").strip().lower()
        argv0 = sys.argv[0] if sys.argv else ""
        script = environ.get("THIS_SCRIPT") or Path(argv0).name or "unknown"
        if piped:
            script = PIPED_SCRIPT
        return cls(
            stack_trace=flag in TRUE_VALUES,
            script=script,
            width=terminal_width(environ),
            piped=piped,
        )


@functools.lru_cache(maxsize=None)
def get_config() -> Config:
    return Config.from_env()
