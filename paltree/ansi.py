"""Terminal colors for the log output and the `paltree tree` listing."""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "ALIAS_STYLE",
    "BOLD",
    "CYAN",
    "DESCRIPTION_STYLE",
    "DIM",
    "LEVEL_STYLES",
    "RED",
    "RESET",
    "YELLOW",
    "colorize",
    "should_colorize",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"
CYAN = "36"

LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}
" log levels printed in color, others are left plain "

ALIAS_STYLE = (CYAN, BOLD)
DESCRIPTION_STYLE = (DIM,)


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether `stream` (stderr by default) should receive colors.

    NO_COLOR disables colors, FORCE_COLOR enables them, otherwise only
    terminals get colors.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    target = sys.stderr if stream is None else stream
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` into the given ANSI codes, e.g. `colorize("x", RED, BOLD)`."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"
