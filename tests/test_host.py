import pytest

from paltree.host import TerminalHost, format_suggestion
from paltree.models import DEFAULT_ERROR_TITLE, ExecutionOutcome, Suggestion


@pytest.fixture
def prompt(mocker):
    "The questionary module as seen by the host"
    return mocker.patch("paltree.host.questionary")


@pytest.fixture
def palette(prompt):
    host = TerminalHost()
    host.manager.configure({"paltree": {"plugins": ["clock"]}})
    return host


def printed(prompt):
    return [call.args[0] for call in prompt.print.call_args_list]


def make_suggestion(title, subtitle=""):
    return Suggestion(title=title, subtitle=subtitle, icon_path="", on_select=ExecutionOutcome)


def test_format_suggestion():
    assert format_suggestion(make_suggestion("Alarms", "Manage alarms")) == "Alarms — Manage alarms"
    assert format_suggestion(make_suggestion("Alarms")) == "Alarms"
    assert format_suggestion(make_suggestion("A", "x" * 20), max_length=10) == "A — xxxxxxx..."


def test_change_query(palette):
    palette.change_query("clock alarm", submit=True)
    assert palette.pending == "clock alarm"
    assert palette.submit is True


def test_submitted_query_skips_the_prompt(palette, prompt):
    palette.change_query("clock", submit=True)
    assert palette.read_query() == "clock"
    assert palette.submit is False
    prompt.text.assert_not_called()


def test_prompt_with_pending_text(palette, prompt):
    prompt.text.return_value.ask.return_value = "clock alarm"
    palette.change_query("clock")
    assert palette.read_query() == "clock alarm"
    prompt.text.assert_called_once_with("›", default="clock")


def test_command_hides_the_palette(palette, prompt):
    prompt.select.return_value.ask.return_value = 0
    outcome = palette.run("clock timer start 5")
    assert outcome == ExecutionOutcome(hide=True)
    prompt.text.assert_not_called()
    (choices,) = [call.kwargs["choices"] for call in prompt.select.call_args_list]
    assert len(choices) == 1


def test_cancel(palette, prompt):
    prompt.text.return_value.ask.return_value = None
    assert palette.run() is None


def test_error_is_shown_once(palette, prompt):
    prompt.select.return_value.ask.return_value = 0
    prompt.text.return_value.ask.return_value = None
    assert palette.run("clock alarm set 99:99") is None
    assert printed(prompt) == [f"{DEFAULT_ERROR_TITLE}: Invalid time: 99:99"]
    prompt.text.assert_called_once_with("›", default="clock alarm set 99:99")
    assert palette.last_outcome is None


def test_navigation(palette, prompt):
    prompt.select.return_value.ask.return_value = 0
    prompt.text.return_value.ask.return_value = None
    palette.run("clock")
    prompt.text.assert_called_once_with("›", default="clock alarm")


def test_empty_query(palette, prompt):
    prompt.text.return_value.ask.side_effect = ["  ", None]
    palette.run()
    assert printed(prompt) == ["Type a keyword to start: clock"]


def test_no_results(palette, prompt):
    prompt.text.return_value.ask.return_value = None
    palette.run("weather")
    assert printed(prompt) == ["No results"]
    prompt.select.assert_not_called()


def test_cancelled_choice(palette, prompt):
    prompt.select.return_value.ask.return_value = None
    prompt.text.return_value.ask.return_value = None
    assert palette.run("clock") is None
    assert palette.last_outcome is None
