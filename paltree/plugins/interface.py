"""Common plugin interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import Configuration
from ..context import PluginContext, PluginMetadata
from ..logging_setup import get_logger
from ..models import DEFAULT_ERROR_TITLE
from ..query import WILDCARD_KEYWORD
from ..validation import ConfigField, ConfigItems, ConfigValidator

if TYPE_CHECKING:
    from ..context import HostAPI
    from ..models import Suggestion
    from ..node import CommandNode
    from ..query import Query

__all__ = ["PLUGIN_BASE_SCHEMA", "Plugin"]

PLUGIN_BASE_SCHEMA = ConfigItems(
    ConfigField("action_keyword", str, description="Word typed to address this plugin, defaults to the plugin name"),
    ConfigField("icon", str, default="", description="Icon used by commands without their own icon"),
    ConfigField("error_title", str, default=DEFAULT_ERROR_TITLE, description="Title shown when a command refuses its arguments"),
)


class Plugin:
    """Base class for any paltree plugin.

    A plugin owns one command tree, built by `build_tree` once the
    configuration is loaded and the host is known.
    """

    config_schema: ConfigItems = ConfigItems()
    " Plugin specific configuration schema, `PLUGIN_BASE_SCHEMA` is always added "

    root: CommandNode | None = None
    " The command tree, available after `bind` "

    context: PluginContext | None = None

    def __init__(self, name: str) -> None:
        """Create a new plugin `name` and the matching logger."""
        self.name = name
        """ the plugin name """
        self.log = get_logger(name)
        """ the logger to use for this plugin """
        self.config = Configuration({}, logger=self.log, schema=self.full_schema)

    @property
    def full_schema(self) -> ConfigItems:
        """The common keys followed by the plugin specific ones."""
        return PLUGIN_BASE_SCHEMA + self.config_schema

    @property
    def action_keyword(self) -> str:
        """Word addressing this plugin in the palette."""
        return self.config.get_str("action_keyword") or self.name

    # Functions to override

    def init(self) -> None:
        """Called once the plugin is created, before the configuration is loaded."""

    def on_reload(self) -> None:
        """Called after each (re)load of the configuration."""

    def exit(self) -> None:
        """Called when the plugin is unloaded."""

    def build_tree(self, context: PluginContext) -> CommandNode:
        """Return the root of this plugin's command tree."""
        raise NotImplementedError

    # Generic implementations

    def load_config(self, config: dict[str, Any]) -> None:
        """Load the configuration section from the passed `config`."""
        self.config.clear()
        self.config.update(config.get(self.name, {}))

    def validate_config(self) -> list[str]:
        """Validate the plugin configuration against `full_schema`.

        Returns:
            List of error messages, unknown keys are only logged
        """
        validator = ConfigValidator(self.config, self.name, self.log)
        errors = validator.validate(self.full_schema)
        validator.warn_unknown_keys(self.full_schema)
        return errors

    def make_metadata(self, default_icon: str = "") -> PluginMetadata:
        """Build the metadata handed to the command tree."""
        return PluginMetadata(
            name=self.name,
            action_keyword=self.action_keyword,
            icon_path=self.config.get_str("icon") or default_icon,
            error_title=self.config.get_str("error_title"),
        )

    def bind(self, api: HostAPI, default_icon: str = "") -> CommandNode:
        """Build the command tree for the given host.

        Args:
            api: the host receiving query changes
            default_icon: icon used when neither the plugin nor its commands define one

        Returns:
            The tree root
        """
        self.context = PluginContext(metadata=self.make_metadata(default_icon), api=api)
        self.root = self.build_tree(self.context)
        self.log.debug("command tree ready for keyword %r", self.context.metadata.action_keyword)
        return self.root

    @property
    def is_wildcard(self) -> bool:
        """True for plugins receiving every query."""
        return self.action_keyword == WILDCARD_KEYWORD

    def query(self, query: Query) -> list[Suggestion]:
        """Return the suggestions for `query`.

        Wildcard plugins see every term, other plugins only the terms
        following their action keyword.
        """
        assert self.root is not None, f"plugin {self.name} is not bound"
        return self.root.query(query.terms if self.is_wildcard else query.parameters)
