"""What a command tree may know about its plugin and its host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["HostAPI", "PluginContext", "PluginMetadata"]


class HostAPI(Protocol):
    """Calls a plugin may make back into the palette host."""

    def change_query(self, query: str, submit: bool = False) -> None:
        """Replace the input line with `query`, running it at once if `submit`."""


@dataclass(frozen=True)
class PluginMetadata:
    """Static plugin information."""

    name: str
    action_keyword: str
    icon_path: str = ""
    error_title: str = ""


@dataclass(frozen=True)
class PluginContext:
    """Shared by every node of one plugin's command tree."""

    metadata: PluginMetadata
    api: HostAPI
