"""A diagnostic describing an unexpected crash, with an optional backtrace."""

from __future__ import annotations

import os
import traceback
from typing import Optional

from .protocol import Diagnostic

__all__ = ["Panic", "format_backtrace", "BACKTRACE_ENV_VAR"]

BACKTRACE_ENV_VAR = "SPANDIAG_BACKTRACE"

_HELP = f"set the `{BACKTRACE_ENV_VAR}=1` environment variable to display a backtrace."
_INDEX_WIDTH = 4
_NEXT_SYMBOL_PADDING = 16


def format_backtrace() -> str:
    """Describe the current call stack, most recent call first.

    Empty unless the backtrace environment variable is set to something
    other than an empty string or ``0``.
    """
    setting = os.environ.get(BACKTRACE_ENV_VAR, "")
    if not setting or setting == "0":
        return ""
    frames = traceback.extract_stack()[:-1]
    parts = []
    for index, frame in enumerate(reversed(frames)):
        parts.append(f"\n{index:{_INDEX_WIDTH}}: - {frame.name or '<unknown>'}")
        if frame.filename and frame.lineno is not None:
            parts.append(f"\n{'':{_NEXT_SYMBOL_PADDING}}at {frame.filename}:{frame.lineno}")
    return "".join(parts)


class Panic(Diagnostic):
    """An unexpected failure, rendered with its message and maybe a backtrace."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)
        self.message = str(message)

    def __str__(self) -> str:
        return f"{self.message}{format_backtrace()}"

    def help(self) -> Optional[str]:
        return _HELP