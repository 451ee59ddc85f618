"""Coloured console logging for the server."""

from __future__ import annotations

import enum
import os
import sys

RED_BG = "\x1b[41m"
GREEN_BG = "\x1b[42m"
YELLOW_BG = "\x1b[43m"
BLUE_BG = "\x1b[44m"
MAGENTA_TEXT = "\x1b[35m"
GREEN_TEXT = "\x1b[32m"
RESET_COLOR = "\x1b[0m"
BOLD_START = "\033[1m"
BOLD_END = "\033[0m"


class LogLevel(enum.Enum):
    """Severity of a log record, with its label and colour."""

    ERROR = ("ERROR", RED_BG)
    INFO = ("INFO", BLUE_BG)
    DEBUG = ("DEBUG", MAGENTA_TEXT)
    WARNING = ("WARNING", YELLOW_BG)
    HTTP = ("HTTP", GREEN_BG)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def color(self) -> str:
        return self.value[1]


def _debug_enabled() -> bool:
    return os.environ.get("XPS_DEBUG") == "1"


def logger(level: LogLevel, function_name: str, format_string: str, *args: object) -> None:
    """Write one log line to stdout; DEBUG lines only when XPS_DEBUG is "1"."""
    if level is LogLevel.DEBUG and not _debug_enabled():
        return
    message = format_string % args if args else format_string
    sys.stdout.write(
        f"{level.color}{BOLD_START} {level.label} {BOLD_END}{RESET_COLOR} "
        f"{GREEN_TEXT}{function_name}{RESET_COLOR} : {message}\n"
    )
    sys.stdout.flush()