"""Command tree nodes.

A plugin exposes one tree of `CommandNode`. The host hands the tokens typed
after the plugin's action keyword to the root node, which routes them down
the tree:

- the root has depth 0, a node at depth `d` picks its sub-command with
  `tokens[d]` and its own alias sits at `tokens[d - 1]`
- for "clock alarm set 15:00" the tokens are ["alarm", "set", "15:00"]:
  the root reads "alarm", `alarm` (depth 1) reads "set", and `set` (depth 2)
  finds its argument "15:00" at index 2

Subclasses customize the behavior by overriding `resolve_query` (custom
suggestions) and `run` (the command action).
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .logging_setup import get_logger
from .models import (
    DEFAULT_ERROR_TITLE,
    CommandTreeError,
    Completed,
    DuplicateAliasError,
    ExecutionOutcome,
    Invalid,
    RunResult,
    Suggestion,
)
from .query import format_query

if TYPE_CHECKING:
    import logging

    from .context import PluginContext

__all__ = ["CommandNode"]


class CommandNode:
    """Base class for commands.

    Lists its sub-commands and routes queries to them unless `resolve_query`
    is overridden, and acts as a navigation stop unless `run` is overridden.
    """

    alias: str = ""
    " token selecting this command among its siblings "
    title: str = ""
    " displayed title, defaults to the alias "
    description: str = ""
    " displayed subtitle, defaults to the first line of the class docstring "
    icon: str | None = None
    " icon path, `None` to use the parent's "
    subcommands: tuple[type[CommandNode], ...] = ()
    " sub-command classes, instantiated in this order "

    log: logging.Logger

    def __init__(
        self,
        context: PluginContext,
        parent: CommandNode | None = None,
        *,
        alias: str | None = None,
        title: str | None = None,
        description: str | None = None,
        icon: str | None = None,
    ) -> None:
        """Create the command and its declared sub-commands.

        Args:
            context: the plugin context shared by the whole tree
            parent: the parent command, `None` for the root
            alias: overrides the class `alias`
            title: overrides the class `title`
            description: overrides the class `description`
            icon: overrides the class `icon`
        """
        self.context = context
        if alias is not None:
            self.alias = alias
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if icon is not None:
            self.icon = icon
        if not self.title:
            self.title = self.alias
        if not self.description:
            self.description = _docstring_summary(type(self))

        self._parent = weakref.ref(parent) if parent is not None else None
        self._children: list[CommandNode] = []

        self.depth = 0
        ancestor = parent
        while ancestor is not None:
            self.depth += 1
            ancestor = ancestor.parent

        # one logger per tree, owned by the root
        self.log = parent.log if parent is not None else get_logger(context.metadata.name)

        for command_class in self.subcommands:
            self.add_subcommand(command_class(context, self))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.alias!r} depth={self.depth}>"

    # Tree structure

    @property
    def parent(self) -> CommandNode | None:
        """The parent command, `None` for the root."""
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple[CommandNode, ...]:
        """Sub-commands, in declaration order."""
        return tuple(self._children)

    @property
    def root(self) -> CommandNode:
        """The root of the tree this command belongs to."""
        node = self
        parent = node.parent
        while parent is not None:
            node = parent
            parent = node.parent
        return node

    def add_subcommand(self, node: CommandNode) -> CommandNode:
        """Attach `node`, which must have been created with `parent=self`.

        Args:
            node: the sub-command

        Returns:
            The attached node

        Raises:
            CommandTreeError: if `node` belongs to another parent or its alias is not a single token
            DuplicateAliasError: if a sibling already uses the same alias
        """
        if node.parent is not self:
            raise CommandTreeError(f"{node!r} was not created as a sub-command of {self!r}")
        if any(child is node for child in self._children):
            raise CommandTreeError(f"{node!r} is already attached to {self!r}")
        if len(node.alias.split()) > 1 or node.alias != node.alias.strip():
            raise CommandTreeError(f"Alias {node.alias!r} must be a single word")
        if self.find_subcommand(node.alias) is not None:
            raise DuplicateAliasError(self.alias or self.context.metadata.name, node.alias)
        self._children.append(node)
        return node

    def find_subcommand(self, alias: str) -> CommandNode | None:
        """Return the sub-command matching `alias` (case insensitive)."""
        wanted = alias.casefold()
        for child in self._children:
            if child.alias.casefold() == wanted:
                return child
        return None

    def icon_path(self) -> str:
        """Return this command's icon, looking into the parents if it has none."""
        if self.icon:
            return self.icon
        parent = self.parent
        if parent is not None:
            return parent.icon_path()
        return self.context.metadata.icon_path

    def command_aliases(self) -> list[str]:
        """Aliases leading to this command, from the root down."""
        aliases: list[str] = []
        node: CommandNode | None = self
        while node is not None and node.depth >= 1:
            if node.alias:
                aliases.append(node.alias)
            node = node.parent
        aliases.reverse()
        return aliases

    def command_path(self) -> str:
        """Return the query addressing this command, e.g. "clock alarm set"."""
        return format_query(self.context.metadata.action_keyword, self.command_aliases())

    def arguments(self, tokens: list[str]) -> list[str]:
        """Return the tokens following this command's alias."""
        return tokens[self.depth :]

    # Query

    def query(self, tokens: Iterable[str]) -> list[Suggestion]:
        """Return the suggestions for `tokens`.

        Args:
            tokens: the query terms following the action keyword

        Returns:
            The suggestions, in display order
        """
        args = list(tokens)
        self.pre_query(args)
        results = self.resolve_query(args)
        return self.after_query(args, results)

    def pre_query(self, tokens: list[str]) -> None:
        """Called before `resolve_query`."""

    def after_query(self, tokens: list[str], results: list[Suggestion]) -> list[Suggestion]:
        """Called with the results of `resolve_query`, returns the final results."""
        return results

    def resolve_query(self, tokens: list[str]) -> list[Suggestion]:
        """Route the query to the matching sub-command or list the sub-commands.

        Override to provide custom suggestions.
        """
        if len(tokens) - self.depth <= 0:
            return self.list_subcommands(tokens)

        segment = tokens[self.depth]
        handler = self.find_subcommand(segment)
        if handler is not None:
            return handler.query(tokens)
        return self.list_subcommands(tokens, segment)

    def list_subcommands(self, tokens: list[str], filter_alias: str = "") -> list[Suggestion]:
        """Return one suggestion per sub-command whose alias contains `filter_alias`."""
        needle = filter_alias.casefold()
        return [self.suggest(child, tokens) for child in self._children if needle in child.alias.casefold()]

    def suggest(
        self,
        node: CommandNode,
        tokens: list[str],
        title: str | None = None,
        subtitle: str | None = None,
    ) -> Suggestion:
        """Build a suggestion executing `node` with `tokens` when selected."""
        bound = list(tokens)
        return Suggestion(
            title=node.title if title is None else title,
            subtitle=node.description if subtitle is None else subtitle,
            icon_path=node.icon_path(),
            on_select=lambda: node.execute(bound),
        )

    # Execution

    @property
    def error_title(self) -> str:
        """Title shown when the command refuses its arguments."""
        return self.context.metadata.error_title or DEFAULT_ERROR_TITLE

    def execute(self, tokens: Iterable[str]) -> ExecutionOutcome:
        """Run the command if `tokens` reach past its alias.

        On `Invalid` arguments the input line is reset to the plugin query so
        the user can fix it, otherwise `after_execute` drills back into this
        command. Exceptions raised by `run` are not handled here.

        Args:
            tokens: the query terms following the action keyword

        Returns:
            The outcome, telling whether to hide the host
        """
        args = list(tokens)
        result: RunResult | None = None
        if len(args) > self.depth:
            result = self._check_result(self.run(args))
            if isinstance(result, Invalid):
                self.log.info("%s refused %s: %s", self.command_path(), args, result.message)
                self.requery_plugin(args)
                return ExecutionOutcome(
                    hide=False,
                    forced_title=self.error_title,
                    forced_subtitle=result.message,
                )
        self.after_execute(args, result)
        return ExecutionOutcome(hide=result.hide if result is not None else False)

    def run(self, tokens: list[str]) -> RunResult:
        """Perform the command.

        Return `Invalid` with a message when the arguments are wrong.
        The default implementation does nothing.
        """
        return Completed()

    def after_execute(self, tokens: list[str], result: RunResult | None) -> None:
        """Called after a successful (or skipped) `run`, drills back into this command."""
        self.requery_current_command()

    def _check_result(self, result: RunResult | bool) -> RunResult:
        if isinstance(result, (Completed, Invalid)):
            return result
        if isinstance(result, bool):
            return Completed(hide=result)
        msg = f"{type(self).__name__}.run() returned {result!r}, expected Completed or Invalid"
        raise TypeError(msg)

    # Host requests

    def requery_plugin(self, tokens: list[str], submit: bool = False) -> None:
        """Set the input line to the action keyword followed by `tokens`."""
        self.context.api.change_query(format_query(self.context.metadata.action_keyword, tokens), submit)

    def requery_current_command(self, args: list[str] | None = None, submit: bool = False) -> None:
        """Set the input line to this command's path followed by `args`."""
        self.context.api.change_query(format_query(self.command_path(), args), submit)


def _docstring_summary(cls: type) -> str:
    doc = cls.__dict__.get("__doc__")
    if not doc or cls is CommandNode:
        return ""
    return doc.strip().split("\n", 1)[0].strip()
