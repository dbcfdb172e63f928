"""Shortcuts - launch programs from a menu described in the config.

```toml
[shortcuts]
action_keyword = "go"

[shortcuts.entries]
"Web search" = "firefox --search [args]"

[shortcuts.entries.Network]
WiFi = "nm-connection-editor"
Bluetooth = "blueman-manager"
```

Tables become sub-menus, strings (or lists of strings, run in order) become
commands. The words typed after a command replace `[args]` in the command
line, or are appended to it.
"""

from __future__ import annotations

import shlex
import subprocess
from typing import TYPE_CHECKING, Any

from ..models import Completed, ExecutionOutcome, Invalid, RunResult, Suggestion
from ..node import CommandNode
from ..utils import apply_variables
from ..validation import ConfigField, ConfigItems
from .interface import Plugin

if TYPE_CHECKING:
    from ..context import PluginContext


def make_alias(label: str) -> str:
    """Turn a menu label into a typeable alias: "Web search" -> "web-search"."""
    return "-".join(label.lower().split())


def expand_command(command: str, args: list[str]) -> str:
    """Insert the quoted `args` into `command`."""
    quoted = " ".join(shlex.quote(arg) for arg in args)
    if "[args]" in command:
        return apply_variables(command, {"args": quoted})
    return f"{command} {quoted}".rstrip()


class Shortcut(CommandNode):
    """A program to launch."""

    def __init__(self, context: PluginContext, parent: CommandNode, label: str, commands: list[str], title: str) -> None:
        super().__init__(context, parent, alias=make_alias(label), title=title, description=" ; ".join(commands))
        self.commands = commands

    def launch(self, args: list[str]) -> bool:
        """Start the commands in the background, returns False if one could not be started."""
        for command in self.commands:
            final_command = expand_command(command, args)
            self.log.info("Executing %s", final_command)
            try:
                subprocess.Popen(final_command, shell=True, start_new_session=True)  # noqa: S602  # pylint: disable=consider-using-with
            except OSError:
                self.log.exception("Unable to run %s", final_command)
                return False
        return True

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        args = self.arguments(tokens)
        if args:
            return [self.suggest(self, tokens, title=f"{self.title} {' '.join(args)}")]
        # nothing typed after the alias: `execute` would only navigate, launch directly
        return [
            Suggestion(
                title=self.title,
                subtitle=self.description,
                icon_path=self.icon_path(),
                on_select=lambda: ExecutionOutcome(hide=self.launch([])),
            )
        ]

    def run(self, tokens: list[str]) -> RunResult:
        if not self.launch(self.arguments(tokens)):
            return Invalid(f"Unable to start {self.title}")
        return Completed(hide=True)


class ShortcutMenu(CommandNode):
    """A group of shortcuts."""

    def __init__(
        self,
        context: PluginContext,
        parent: CommandNode | None,
        entries: dict[str, Any],
        config: dict[str, str],
        label: str = "",
    ) -> None:
        title = f"{config['submenu_start']} {label} {config['submenu_end']}".strip() if label else ""
        super().__init__(context, parent, alias=make_alias(label), title=title, description=f"{len(entries)} entries" if label else "")
        for child_label, value in entries.items():
            if isinstance(value, dict):
                self.add_subcommand(ShortcutMenu(context, self, value, config, child_label))
            else:
                commands = [value] if isinstance(value, str) else [str(item) for item in value]
                child_title = f"{config['command_start']} {child_label} {config['command_end']}".strip()
                self.add_subcommand(Shortcut(context, self, child_label, commands, child_title))


def _check_entries(entries: Any, path: str = "") -> list[str]:  # noqa: ANN401
    errors = []
    for label, value in entries.items():
        name = f"{path}.{label}" if path else label
        if isinstance(value, dict):
            errors.extend(_check_entries(value, name))
        elif isinstance(value, list):
            if not value or not all(isinstance(item, str) for item in value):
                errors.append(f"{name}: expected a non-empty list of command strings")
        elif not isinstance(value, str):
            errors.append(f"{name}: expected a command string, a list of strings or a table")
    return errors


class Extension(Plugin):
    """A flexible way to make your own launchers."""

    config_schema = ConfigItems(
        ConfigField("entries", dict, required=True, description="Menu entries structure (nested tables of commands)", validator=_check_entries),
        ConfigField("command_start", str, default="", description="Prefix for command entries"),
        ConfigField("command_end", str, default="", description="Suffix for command entries"),
        ConfigField("submenu_start", str, default="", description="Prefix for submenu entries"),
        ConfigField("submenu_end", str, default="➜", description="Suffix for submenu entries"),
    )

    def build_tree(self, context: PluginContext) -> CommandNode:
        decorations = {key: self.config.get_str(key) for key in ("command_start", "command_end", "submenu_start", "submenu_end")}
        entries = self.config.get("entries", {})
        assert isinstance(entries, dict)
        return ShortcutMenu(context, None, entries, decorations)
