"""Data types shared by the command tree, the plugins and the host."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "DEFAULT_ERROR_TITLE",
    "CommandTreeError",
    "Completed",
    "ConfigError",
    "DuplicateAliasError",
    "ExecutionOutcome",
    "ExitCode",
    "Invalid",
    "PaltreeError",
    "RunResult",
    "Suggestion",
]

DEFAULT_ERROR_TITLE = "An error has occurred"


@dataclass(frozen=True)
class ExecutionOutcome:
    """What `CommandNode.execute` reports back to the host.

    `forced_title` and `forced_subtitle` are only set when the command rejected
    its arguments; the host shows them above the next result list.
    """

    hide: bool = False
    forced_title: str = ""
    forced_subtitle: str = ""

    @property
    def failed(self) -> bool:
        """True when the command rejected its arguments."""
        return bool(self.forced_title or self.forced_subtitle)


@dataclass(frozen=True)
class Suggestion:
    """A display-ready entry of the palette result list."""

    title: str
    subtitle: str
    icon_path: str
    on_select: Callable[[], ExecutionOutcome]

    def select(self) -> ExecutionOutcome:
        """Run the bound action."""
        return self.on_select()


@dataclass(frozen=True)
class Completed:
    """The command ran; `hide` asks the host to close the palette."""

    hide: bool = False


@dataclass(frozen=True)
class Invalid:
    """The command refused its arguments, `message` is shown to the user."""

    message: str


RunResult = Completed | Invalid


class PaltreeError(Exception):
    """Base class for paltree errors."""


class ConfigError(PaltreeError):
    """Used for configuration errors which already triggered logging."""


class CommandTreeError(PaltreeError, ValueError):
    """The command tree is malformed."""


class DuplicateAliasError(CommandTreeError):
    """Two sibling commands share the same alias."""

    def __init__(self, parent: str, alias: str) -> None:
        super().__init__(f"Duplicate alias {alias!r} under {parent!r}")
        self.parent = parent
        self.alias = alias


class ExitCode(IntEnum):
    """Standard exit codes for the paltree CLI."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Unknown sub-command, missing arguments
    CONFIG_ERROR = 2  # Config file missing or invalid
    NO_RESULTS = 3  # Non-interactive query produced nothing
