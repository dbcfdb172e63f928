"""Clock - alarms and timers from the palette.

Commands:

- `clock alarm set <HH:MM>` adds an alarm
- `clock alarm list` shows the alarms
- `clock alarm clear <number|all>` removes alarms
- `clock timer start <minutes>` starts a countdown

Alarms and timers only live as long as the process.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models import Completed, Invalid, RunResult
from ..node import CommandNode
from ..validation import ConfigField, ConfigItems
from .interface import Plugin

if TYPE_CHECKING:
    from ..context import PluginContext
    from ..models import Suggestion

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(text: str) -> datetime.time | None:
    """Parse a "HH:MM" 24h time, returns None if invalid."""
    match = _TIME_RE.match(text)
    if not match:
        return None
    hours, minutes = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59:  # noqa: PLR2004
        return None
    return datetime.time(hours, minutes)


@dataclass
class AlarmBook:
    """Alarms and timers of one clock plugin."""

    max_alarms: int = 10
    alarms: list[datetime.time] = field(default_factory=list)
    timers: list[datetime.datetime] = field(default_factory=list)

    def add_alarm(self, when: datetime.time) -> None:
        """Add an alarm, keeping the list sorted."""
        self.alarms.append(when)
        self.alarms.sort()


class ClockCommand(CommandNode):
    """Base for clock commands, gives access to the shared `AlarmBook`."""

    @property
    def book(self) -> AlarmBook:
        """The alarm book stored on the tree root."""
        root = self.root
        assert isinstance(root, ClockRoot)
        return root.book


class SetAlarm(ClockCommand):
    """<HH:MM> Set an alarm"""

    alias = "set"
    title = "Set an alarm"

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        args = self.arguments(tokens)
        if not args:
            return [self.suggest(self, tokens, subtitle="Type a time, e.g. 07:30")]
        return [self.suggest(self, tokens, title=f"Set alarm at {' '.join(args)}", subtitle="Press enter to confirm")]

    def run(self, tokens: list[str]) -> RunResult:
        args = self.arguments(tokens)
        if len(args) != 1:
            return Invalid("Usage: set <HH:MM>")
        when = parse_time(args[0])
        if when is None:
            return Invalid(f"Invalid time: {args[0]}")
        if len(self.book.alarms) >= self.book.max_alarms:
            return Invalid(f"Too many alarms ({self.book.max_alarms} max)")
        self.book.add_alarm(when)
        self.log.info("alarm set at %s", when.strftime("%H:%M"))
        return Completed()

    def after_execute(self, tokens: list[str], result: RunResult | None) -> None:
        listing = self.parent.find_subcommand("list") if self.parent else None
        if result is not None and listing is not None:
            listing.requery_current_command()
        else:
            super().after_execute(tokens, result)


class ListAlarms(ClockCommand):
    """Show the alarms"""

    alias = "list"
    title = "List alarms"

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        if not self.book.alarms:
            return [self.suggest(self, tokens, title="No alarm set", subtitle="Use 'alarm set <HH:MM>' to add one")]
        return [
            self.suggest(self, tokens, title=when.strftime("%H:%M"), subtitle=f"Alarm #{index}")
            for index, when in enumerate(self.book.alarms, start=1)
        ]


class ClearAlarms(ClockCommand):
    """<number|all> Remove alarms"""

    alias = "clear"
    title = "Clear alarms"

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        args = self.arguments(tokens)
        if args:
            return [self.suggest(self, tokens, title=f"Clear alarm {args[0]}")]
        base = self.command_aliases()
        results = [self.suggest(self, [*base, "all"], title="Clear all alarms")]
        results.extend(
            self.suggest(self, [*base, str(index)], title=f"Clear {when.strftime('%H:%M')}", subtitle=f"Alarm #{index}")
            for index, when in enumerate(self.book.alarms, start=1)
        )
        return results

    def run(self, tokens: list[str]) -> RunResult:
        target = self.arguments(tokens)[0]
        if target.lower() == "all":
            self.book.alarms.clear()
            return Completed()
        if not target.isdecimal() or not 1 <= int(target) <= len(self.book.alarms):
            return Invalid(f"No alarm #{target}")
        del self.book.alarms[int(target) - 1]
        return Completed()


class Alarm(ClockCommand):
    """Manage alarms"""

    alias = "alarm"
    title = "Alarms"
    subcommands = (SetAlarm, ListAlarms, ClearAlarms)


class StartTimer(ClockCommand):
    """<minutes> Start a countdown"""

    alias = "start"
    title = "Start a timer"

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        args = self.arguments(tokens)
        if not args:
            return [self.suggest(self, tokens, subtitle="Type a number of minutes")]
        return [self.suggest(self, tokens, title=f"Start a {args[0]} minutes timer", subtitle="Press enter to confirm")]

    def run(self, tokens: list[str]) -> RunResult:
        value = self.arguments(tokens)[0]
        if not value.isdecimal() or int(value) == 0:
            return Invalid(f"Not a number of minutes: {value}")
        deadline = datetime.datetime.now() + datetime.timedelta(minutes=int(value))
        self.book.timers.append(deadline)
        self.log.info("timer ends at %s", deadline.strftime("%H:%M:%S"))
        return Completed(hide=True)


class Timer(ClockCommand):
    """Countdowns"""

    alias = "timer"
    title = "Timers"
    icon = "images/timer.png"
    subcommands = (StartTimer,)


class ClockRoot(ClockCommand):
    """Clock commands"""

    subcommands = (Alarm, Timer)

    def __init__(self, context: PluginContext, book: AlarmBook) -> None:
        self._book = book
        super().__init__(context)

    @property
    def book(self) -> AlarmBook:
        return self._book


class Extension(Plugin):
    """Alarms and timers."""

    config_schema = ConfigItems(
        ConfigField("max_alarms", int, default=10, description="Maximum number of alarms"),
    )

    def init(self) -> None:
        self.book = AlarmBook()

    def on_reload(self) -> None:
        self.book.max_alarms = self.config.get_int("max_alarms", 10)

    def build_tree(self, context: PluginContext) -> CommandNode:
        return ClockRoot(context, self.book)
