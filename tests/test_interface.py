import pytest

from paltree.node import CommandNode
from paltree.plugins.interface import PLUGIN_BASE_SCHEMA, Plugin
from paltree.query import Query
from paltree.validation import ConfigField, ConfigItems

from .testtools import build_menu


class Extension(Plugin):
    """A two commands menu."""

    config_schema = ConfigItems(ConfigField("size", int, default=3))

    def build_tree(self, context):
        return build_menu(context, ["one", "two"])


@pytest.fixture
def plugin():
    return Extension("menu")


def test_init(plugin):
    assert plugin.name == "menu"
    assert plugin.root is None
    assert plugin.config == {}


def test_full_schema(plugin):
    names = [field.name for field in plugin.full_schema]
    assert names == [field.name for field in PLUGIN_BASE_SCHEMA] + ["size"]
    assert plugin.config.get_int("size") == 3


def test_load_config(plugin):
    plugin.load_config({"menu": {"size": 5}, "other": {"x": 1}})
    assert plugin.config.get_int("size") == 5
    plugin.load_config({})
    assert plugin.config.get_int("size") == 3


def test_validate_config(plugin):
    plugin.load_config({"menu": {"size": "big", "sise": 1}})
    (error,) = plugin.validate_config()
    assert "size" in error


def test_action_keyword(plugin):
    assert plugin.action_keyword == "menu"
    plugin.load_config({"menu": {"action_keyword": "m"}})
    assert plugin.action_keyword == "m"
    assert not plugin.is_wildcard


def test_bind(plugin, host):
    plugin.load_config({"menu": {"error_title": "Menu error"}})
    root = plugin.bind(host, default_icon="default.png")
    assert plugin.root is root
    assert plugin.context.metadata.action_keyword == "menu"
    assert plugin.context.metadata.icon_path == "default.png"
    assert plugin.context.metadata.error_title == "Menu error"
    assert plugin.context.api is host


def test_plugin_icon_wins(plugin, host):
    plugin.load_config({"menu": {"icon": "menu.png"}})
    plugin.bind(host, default_icon="default.png")
    assert plugin.root.children[0].icon_path() == "menu.png"


def test_query_strips_keyword(plugin, host):
    plugin.bind(host)
    assert [s.title for s in plugin.query(Query.parse("menu tw"))] == ["Two"]


def test_wildcard_query_keeps_every_term(plugin, host):
    plugin.load_config({"menu": {"action_keyword": "*"}})
    plugin.bind(host)
    assert plugin.is_wildcard
    assert [s.title for s in plugin.query(Query.parse("tw"))] == ["Two"]
    plugin.root.children[0].requery_current_command()
    assert host.last == ("one", False)


def test_build_tree_is_required(host):
    with pytest.raises(NotImplementedError):
        Plugin("bare").bind(host)


def test_hooks_do_nothing(plugin):
    plugin.init()
    plugin.on_reload()
    plugin.exit()


def test_unbound_query(plugin):
    with pytest.raises(AssertionError):
        plugin.query(Query.parse("menu"))


def test_tree_type(plugin, host):
    assert isinstance(plugin.bind(host), CommandNode)
