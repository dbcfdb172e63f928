"""Tokenization of the palette input line."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["WILDCARD_KEYWORD", "Query", "format_query"]

WILDCARD_KEYWORD = "*"
" Action keyword of plugins receiving every query "


@dataclass(frozen=True)
class Query:
    """A parsed palette input line.

    `terms` holds every whitespace separated word, `parameters` the words
    following the action keyword. Command trees only ever see `parameters`.
    """

    raw: str
    terms: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, raw: str) -> Query:
        """Split `raw` on any whitespace, dropping empty terms."""
        return cls(raw=raw, terms=raw.split())

    @property
    def action_keyword(self) -> str:
        """First term of the query, or an empty string."""
        return self.terms[0] if self.terms else ""

    @property
    def parameters(self) -> list[str]:
        """Terms following the action keyword."""
        return self.terms[1:]


def format_query(action_keyword: str, tokens: list[str] | None = None) -> str:
    """Build a query string out of an action keyword and tokens.

    The wildcard keyword is never written, since wildcard plugins receive
    every query as-is.

    >>> format_query("clock", ["alarm", "set"])
    'clock alarm set'
    >>> format_query("clock", [])
    'clock'
    >>> format_query("*", ["alarm"])
    'alarm'
    """
    words = [action_keyword] if action_keyword and action_keyword != WILDCARD_KEYWORD else []
    return " ".join([*words, *(tokens or [])]).rstrip()
