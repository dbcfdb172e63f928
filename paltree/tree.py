"""Command tree walking and display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .ansi import ALIAS_STYLE, DESCRIPTION_STYLE, colorize

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .node import CommandNode

__all__ = ["find", "format_tree", "walk"]


def walk(node: CommandNode) -> Iterator[CommandNode]:
    """Yield `node` and its descendants, depth first, in declaration order."""
    yield node
    for child in node.children:
        yield from walk(child)


def find(root: CommandNode, tokens: Iterable[str]) -> CommandNode:
    """Return the deepest command addressed by `tokens`.

    Follows exact (case insensitive) alias matches the same way queries are
    routed, stopping at the first token which matches no sub-command.

    Args:
        root: the tree root
        tokens: the query terms following the action keyword

    Returns:
        The addressed command, `root` when the first token matches nothing
    """
    node = root
    for token in tokens:
        child = node.find_subcommand(token)
        if child is None:
            break
        node = child
    return node


def format_tree(root: CommandNode, colors: bool = False, indent: str = "  ") -> str:
    """Render the tree as an indented listing.

    The root is shown with its command path, other commands with their alias
    and description, e.g.::

        clock
          alarm  Manage alarms
            set  <HH:MM> Set an alarm

    Args:
        root: the tree root
        colors: use ANSI colors
        indent: indentation added for each level

    Returns:
        The listing, one command per line
    """
    lines = []
    for node in walk(root):
        name = node.command_path() if node is root else node.alias
        if colors:
            name = colorize(name, *ALIAS_STYLE)
        line = indent * (node.depth - root.depth) + name
        if node.description:
            description = colorize(node.description, *DESCRIPTION_STYLE) if colors else node.description
            line = f"{line}  {description}"
        lines.append(line)
    return "\n".join(lines)
