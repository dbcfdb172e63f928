"""Command line entry point.

Usage::

    paltree [--config PATH] [--debug] [QUERY...]        interactive palette
    paltree tree [--config PATH] [KEYWORD [ALIAS...]]   print the command trees
    paltree query [--config PATH] QUERY...              print the suggestions
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .ansi import should_colorize
from .host import TerminalHost, format_suggestion
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode, PaltreeError
from .query import Query
from .tree import find, format_tree

if TYPE_CHECKING:
    from .manager import Manager

__all__ = ["main", "parse_args"]

SUBCOMMANDS = ("tree", "query")


@dataclass
class Args:
    """Parsed command line arguments."""

    command: str = ""
    config: str = ""
    debug: bool = False
    help: bool = False
    words: list[str] = field(default_factory=list)


def parse_args(argv: list[str]) -> Args:
    """Parse command line arguments.

    Args:
        argv: Command line arguments (without program name)

    Returns:
        Parsed arguments

    Raises:
        ValueError: if an option is missing its value
    """
    args = Args()
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--config":
            if i + 1 >= len(argv):
                msg = "--config requires a path"
                raise ValueError(msg)
            args.config = argv[i + 1]
            i += 2
            continue
        if arg == "--debug":
            args.debug = True
        elif arg in {"--help", "-h"}:
            args.help = True
        elif not args.command and not args.words and arg in SUBCOMMANDS:
            args.command = arg
        else:
            args.words.append(arg)
        i += 1
    return args


def print_help() -> None:
    """Print the usage message."""
    print(__doc__.strip())


def print_trees(manager: Manager, words: list[str]) -> int:
    """Print the command trees, or the sub-tree addressed by `words`."""
    colors = should_colorize(sys.stdout)
    if not words:
        for plugin in manager.plugins.values():
            if plugin.root is not None:
                print(format_tree(plugin.root, colors=colors))
        return ExitCode.SUCCESS

    query = Query.parse(" ".join(words))
    plugins = [plugin for plugin in manager.route(query) if plugin.root is not None]
    if not plugins:
        print(f"No plugin uses the keyword '{query.action_keyword}'", file=sys.stderr)
        return ExitCode.NO_RESULTS
    for plugin in plugins:
        tokens = query.terms if plugin.is_wildcard else query.parameters
        print(format_tree(find(plugin.root, tokens), colors=colors))
    return ExitCode.SUCCESS


def run(args: Args) -> int:
    """Run the command described by `args`, returns the exit code."""
    host = TerminalHost()
    try:
        host.manager.load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    if args.command == "tree":
        return print_trees(host.manager, args.words)

    if args.command == "query":
        if not args.words:
            print("Usage: paltree query QUERY...", file=sys.stderr)
            return ExitCode.USAGE_ERROR
        suggestions = host.manager.query(" ".join(args.words))
        for suggestion in suggestions:
            print(format_suggestion(suggestion))
        return ExitCode.SUCCESS if suggestions else ExitCode.NO_RESULTS

    try:
        host.run(" ".join(args.words))
    except KeyboardInterrupt:
        print("Interrupted")
    finally:
        host.manager.unload()
    return ExitCode.SUCCESS


def main() -> None:
    """Entry point for the paltree command."""
    try:
        args = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(ExitCode.USAGE_ERROR)

    if args.help:
        print_help()
        sys.exit(ExitCode.SUCCESS)

    init_logger(force_debug=args.debug)
    try:
        sys.exit(run(args))
    except PaltreeError as e:
        get_logger().critical("%s", e)
        sys.exit(ExitCode.CONFIG_ERROR)


if __name__ == "__main__":
    main()
