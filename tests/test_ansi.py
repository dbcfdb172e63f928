"""Tests for the ansi module."""

import logging
from io import StringIO

import pytest

from paltree.ansi import ALIAS_STYLE, BOLD, LEVEL_STYLES, RED, colorize, should_colorize


class FakeTerminal(StringIO):
    def isatty(self):
        return True


@pytest.fixture
def plain_env(monkeypatch):
    "No color related variable set"
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    return monkeypatch


def test_colorize():
    assert colorize("hello", RED) == "\x1b[31mhello\x1b[0m"
    assert colorize("hello", RED, BOLD) == "\x1b[31;1mhello\x1b[0m"
    assert colorize("hello") == "hello"


def test_terminal_gets_colors(plain_env):
    assert should_colorize(FakeTerminal()) is True


def test_pipe_gets_no_colors(plain_env):
    assert should_colorize(StringIO()) is False
    assert should_colorize(object()) is False


def test_no_color(plain_env):
    plain_env.setenv("NO_COLOR", "1")
    plain_env.setenv("FORCE_COLOR", "1")
    assert should_colorize(FakeTerminal()) is False


def test_force_color(plain_env):
    plain_env.setenv("FORCE_COLOR", "1")
    assert should_colorize(StringIO()) is True


def test_styles():
    assert LEVEL_STYLES[logging.CRITICAL] == (RED, BOLD)
    assert logging.INFO not in LEVEL_STYLES
    assert BOLD in ALIAS_STYLE
