" generic fixtures "
import logging

import pytest

from .testtools import ClockRoot, RecordingHost, make_context


def pytest_configure():
    "Runs once before all"
    from paltree.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A plain logger"
    return logging.getLogger("tests")


@pytest.fixture
def host():
    "Records query changes"
    return RecordingHost()


@pytest.fixture
def context(host):
    "Context of a plugin using the 'clock' keyword"
    return make_context(host)


@pytest.fixture
def clock_tree(context):
    "root -> alarm -> set"
    return ClockRoot(context)


@pytest.fixture
def set_node(clock_tree):
    "The 'set' command of `clock_tree`"
    return clock_tree.find_subcommand("alarm").find_subcommand("set")


@pytest.fixture
def config_file(tmp_path):
    "Write a config file and return its path"

    def _write(text, name="config.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
