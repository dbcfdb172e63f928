"""Interactive terminal host.

Owns the input line and the result list: reads a query, shows the
suggestions of the plugins and runs the selected one, until a command asks
to hide the palette or the user cancels.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import questionary
from questionary import Choice

from .constants import MAX_SUBTITLE_LENGTH
from .logging_setup import get_logger
from .manager import Manager

if TYPE_CHECKING:
    from .models import ExecutionOutcome, Suggestion

__all__ = ["TerminalHost", "format_suggestion"]

PROMPT = "›"


def format_suggestion(suggestion: Suggestion, max_length: int = MAX_SUBTITLE_LENGTH) -> str:
    """Return the one-line text displayed for `suggestion`."""
    subtitle = suggestion.subtitle
    if len(subtitle) > max_length:
        subtitle = subtitle[: max_length - 3] + "..."
    return f"{suggestion.title} — {subtitle}" if subtitle else suggestion.title


class TerminalHost:
    """A command palette running in the terminal."""

    def __init__(self) -> None:
        self.log = get_logger("host")
        self.manager = Manager(self)
        self.pending = ""
        " text of the next input line "
        self.submit = False
        " run `pending` without prompting "
        self.last_outcome: ExecutionOutcome | None = None

    # HostAPI

    def change_query(self, query: str, submit: bool = False) -> None:
        """Replace the input line with `query`, running it at once if `submit`."""
        self.log.debug("query changed to %r (submit=%s)", query, submit)
        self.pending = query
        self.submit = submit

    # Session

    def read_query(self) -> str | None:
        """Return the next query, prompting unless a submitted query is pending."""
        if self.submit:
            self.submit = False
            return self.pending
        return questionary.text(PROMPT, default=self.pending).ask()

    def show_notice(self) -> None:
        """Print (once) the error reported by the last executed command."""
        outcome = self.last_outcome
        self.last_outcome = None
        if outcome is not None and outcome.failed:
            questionary.print(f"{outcome.forced_title}: {outcome.forced_subtitle}", style="bold fg:red")

    def choose(self, suggestions: list[Suggestion]) -> Suggestion | None:
        """Let the user pick one of `suggestions`, None if cancelled."""
        choices = [Choice(title=format_suggestion(item), value=index) for index, item in enumerate(suggestions)]
        index = questionary.select(self.pending, choices=choices).ask()
        if index is None:
            return None
        return suggestions[index]

    def run(self, initial: str = "") -> ExecutionOutcome | None:
        """Run the palette until a command hides it or the user cancels.

        Args:
            initial: query to run first, prompting otherwise

        Returns:
            The outcome of the command which hid the palette, None when cancelled
        """
        self.change_query(initial, submit=bool(initial.strip()))
        while True:
            self.show_notice()
            text = self.read_query()
            if text is None:
                return None
            self.pending = text
            if not text.strip():
                keywords = ", ".join(self.manager.keywords()) or "none"
                questionary.print(f"Type a keyword to start: {keywords}", style="fg:cyan")
                continue

            suggestions = self.manager.query(text)
            if not suggestions:
                questionary.print("No results", style="fg:yellow")
                continue

            suggestion = self.choose(suggestions)
            if suggestion is None:
                continue
            outcome = suggestion.select()
            self.last_outcome = outcome
            if outcome.hide:
                return outcome
