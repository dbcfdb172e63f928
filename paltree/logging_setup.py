"""Logging setup.

Every plugin logs through its own named logger (`get_logger(plugin.name)`).
All loggers share the handlers created by `init_logger`: the screen, and
optionally a file.
"""

import logging

from .ansi import LEVEL_STYLES, colorize, should_colorize
from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_logger",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"
SCREEN_FORMAT = r"%(message)s"
SCREEN_DEBUG_FORMAT = r"%(name)12s - %(message)s // %(filename)s:%(lineno)d"


class LogObjects:
    """Handlers shared by every logger."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """Short messages on screen, colored by level."""

    def __init__(self, colors: bool = False, debug: bool = False) -> None:
        super().__init__()
        fmt = SCREEN_DEBUG_FORMAT if debug else SCREEN_FORMAT
        self._plain = logging.Formatter(fmt)
        self._by_level: dict[int, logging.Formatter] = {}
        if colors:
            self._by_level = {level: logging.Formatter(colorize(fmt, *codes)) for level, codes in LEVEL_STYLES.items()}

    def format(self, record: logging.LogRecord) -> str:
        return self._by_level.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Create the shared handlers.

    Loggers returned by `get_logger` afterwards use the new handlers.

    Args:
        filename: also log to this file
        force_debug: enable the debug mode
    """
    if force_debug:
        set_debug(True)

    logging.basicConfig()
    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter(colors=should_colorize(), debug=is_debug()))
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "paltree", level: int | None = None) -> logging.Logger:
    """Return the logger `name`, attached to the shared handlers.

    Args:
        name: logger's name, usually the plugin name
        level: logger's level, DEBUG in debug mode and WARNING otherwise if not set

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
