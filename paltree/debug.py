"""Debug mode flag, set from the environment or the `--debug` option."""

import os

__all__ = [
    "DEBUG_VARIABLES",
    "is_debug",
    "set_debug",
]

DEBUG_VARIABLES = ("PALTREE_DEBUG", "DEBUG")
" any of these set to a non-empty value enables the debug mode at startup "


def _from_environment() -> bool:
    return any(os.environ.get(name) for name in DEBUG_VARIABLES)


class _Flags:
    debug = _from_environment()


def is_debug() -> bool:
    """Tell whether the debug mode is enabled."""
    return _Flags.debug


def set_debug(value: bool) -> None:
    """Enable or disable the debug mode, for loggers created afterwards."""
    _Flags.debug = value
