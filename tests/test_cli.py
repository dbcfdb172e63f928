import sys

import pytest

from paltree import cli
from paltree.cli import Args, parse_args
from paltree.models import ExitCode

CONFIG = '[paltree]\nplugins = ["clock"]\n'


@pytest.fixture
def config_path(config_file, monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    return str(config_file(CONFIG))


class TestParseArgs:
    """Command line parsing."""

    def test_empty(self):
        assert parse_args([]) == Args()

    def test_options(self):
        args = parse_args(["--config", "my.toml", "--debug", "clock", "alarm"])
        assert args.config == "my.toml"
        assert args.debug is True
        assert args.command == ""
        assert args.words == ["clock", "alarm"]

    def test_subcommand(self):
        assert parse_args(["tree"]).command == "tree"
        args = parse_args(["query", "clock", "tree"])
        assert args.command == "query"
        assert args.words == ["clock", "tree"]

    def test_subcommand_must_come_first(self):
        args = parse_args(["clock", "query"])
        assert args.command == ""
        assert args.words == ["clock", "query"]

    def test_help(self):
        assert parse_args(["-h"]).help is True
        assert parse_args(["--help"]).help is True

    def test_missing_config_path(self):
        with pytest.raises(ValueError, match="--config"):
            parse_args(["--config"])


def test_tree(config_path, capsys):
    assert cli.run(Args(command="tree", config=config_path)) == ExitCode.SUCCESS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "clock  Clock commands"
    assert "  alarm  Manage alarms" in lines
    assert "    set  <HH:MM> Set an alarm" in lines
    assert "    start  <minutes> Start a countdown" in lines


def test_subtree(config_path, capsys):
    assert cli.run(Args(command="tree", config=config_path, words=["clock", "alarm"])) == ExitCode.SUCCESS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "clock alarm  Manage alarms"
    assert lines[1] == "  set  <HH:MM> Set an alarm"
    assert len(lines) == 4


def test_subtree_unknown_keyword(config_path, capsys):
    assert cli.run(Args(command="tree", config=config_path, words=["weather"])) == ExitCode.NO_RESULTS
    assert "weather" in capsys.readouterr().err


def test_query(config_path, capsys):
    assert cli.run(Args(command="query", config=config_path, words=["clock"])) == ExitCode.SUCCESS
    assert capsys.readouterr().out.splitlines() == ["Alarms — Manage alarms", "Timers — Countdowns"]


def test_query_without_results(config_path):
    assert cli.run(Args(command="query", config=config_path, words=["weather"])) == ExitCode.NO_RESULTS


def test_query_usage(config_path, capsys):
    assert cli.run(Args(command="query", config=config_path)) == ExitCode.USAGE_ERROR
    assert "Usage" in capsys.readouterr().err


def test_config_error(tmp_path, capsys):
    assert cli.run(Args(command="tree", config=str(tmp_path / "missing.toml"))) == ExitCode.CONFIG_ERROR
    assert "Error: Config file not found" in capsys.readouterr().err


def test_interactive(config_path, mocker):
    run = mocker.patch("paltree.cli.TerminalHost.run", return_value=None)
    unload = mocker.patch("paltree.manager.Manager.unload")
    assert cli.run(Args(config=config_path, words=["clock", "alarm"])) == ExitCode.SUCCESS
    run.assert_called_once_with("clock alarm")
    unload.assert_called_once()


def test_interrupted(config_path, mocker, capsys):
    mocker.patch("paltree.cli.TerminalHost.run", side_effect=KeyboardInterrupt)
    assert cli.run(Args(config=config_path)) == ExitCode.SUCCESS
    assert "Interrupted" in capsys.readouterr().out


def test_main_help(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["paltree", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == ExitCode.SUCCESS
    assert "Usage" in capsys.readouterr().out


def test_main_usage_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["paltree", "--config"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == ExitCode.USAGE_ERROR
    assert "requires a path" in capsys.readouterr().err
