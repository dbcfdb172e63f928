"""Plugin manager: loads the configured plugins and routes queries to them."""

from __future__ import annotations

import importlib
import sys
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .config_loader import ConfigLoader
from .constants import DEFAULT_ICON, MAIN_SECTION
from .logging_setup import get_logger
from .models import ConfigError, PaltreeError
from .query import Query
from .validation import ConfigField, ConfigItems, ConfigValidator

if TYPE_CHECKING:
    from pathlib import Path

    from .context import HostAPI
    from .models import Suggestion
    from .plugins.interface import Plugin

__all__ = ["PALTREE_CONFIG_SCHEMA", "Manager"]

PALTREE_CONFIG_SCHEMA = ConfigItems(
    ConfigField("plugins", list, required=True, description="List of plugins to load"),
    ConfigField("include", (str, list), description="Additional config files or folders to include"),
    ConfigField("plugins_paths", list, default=[], description="Additional paths to search for third-party plugins"),
    ConfigField("default_icon", str, default=DEFAULT_ICON, description="Icon used when no plugin or command defines one"),
)


class Manager:
    """Owns the plugins of one palette session."""

    def __init__(self, api: HostAPI) -> None:
        """Create an empty manager.

        Args:
            api: the host receiving query changes from the plugins
        """
        self.api = api
        self.log = get_logger()
        self.config: dict[str, Any] = {}
        self.plugins: dict[str, Plugin] = {}
        self.by_keyword: dict[str, Plugin] = {}
        self.main_config = Configuration({}, logger=self.log, schema=PALTREE_CONFIG_SCHEMA)

    def load_config(self, config_filename: str | Path = "") -> None:
        """Load the configuration file then the plugins it lists.

        Raises:
            ConfigError: if the file can't be read or the main section is invalid
        """
        self.config = ConfigLoader(self.log).load(config_filename)
        self.configure(self.config)

    def configure(self, config: dict[str, Any]) -> None:
        """Load the plugins described by an already parsed `config`.

        Raises:
            ConfigError: if the main section is invalid
        """
        self.config = config
        section = config.get(MAIN_SECTION, {})
        errors = ConfigValidator(section, MAIN_SECTION, self.log).validate(PALTREE_CONFIG_SCHEMA)
        for error in errors:
            self.log.error(error)
        if errors:
            msg = f"Invalid [{MAIN_SECTION}] section: {errors[0]}"
            raise ConfigError(msg)
        self.main_config = Configuration(section, logger=self.log, schema=PALTREE_CONFIG_SCHEMA)

        for path in self.main_config.get_list("plugins_paths"):
            if str(path) not in sys.path:
                sys.path.append(str(path))

        for name in self.main_config.get_list("plugins"):
            if name not in self.plugins:
                self._load_single_plugin(name)

    def _load_single_plugin(self, name: str) -> bool:
        """Load, configure and bind a single plugin.

        Args:
            name: Plugin name, a dotted module path or an "external:" prefixed module path

        Returns:
            True if the plugin is ready to receive queries
        """
        if "external:" in name:
            modname = name.replace("external:", "")
        elif "." in name:
            modname = name
        else:
            modname = f"paltree.plugins.{name}"
        try:
            plug: Plugin = importlib.import_module(modname).Extension(name)
        except ModuleNotFoundError:
            self.log.exception("Unable to locate plugin called '%s'", name)
            return False
        except Exception as e:
            self.log.exception("Error loading plugin %s:", name)
            msg = f"Error loading plugin {name}: {e}"
            raise PaltreeError(msg) from e

        try:
            plug.init()
            plug.load_config(self.config)
            errors = plug.validate_config()
            for error in errors:
                self.log.error(error)
            if errors:
                self.log.error("Skipping plugin %s: invalid configuration", name)
                return False
            plug.on_reload()
            keyword = plug.action_keyword
            if not plug.is_wildcard and keyword.lower() in self.by_keyword:
                self.log.error("Skipping plugin %s: keyword '%s' already used by %s", name, keyword, self.by_keyword[keyword.lower()].name)
                return False
            plug.bind(self.api, self.main_config.get_str("default_icon"))
        except Exception as e:
            self.log.exception("Error initializing plugin %s:", name)
            msg = f"Error initializing plugin {name}: {e}"
            raise PaltreeError(msg) from e

        self.plugins[name] = plug
        if not plug.is_wildcard:
            self.by_keyword[keyword.lower()] = plug
        plug.log.info("configured, keyword '%s'", keyword)
        return True

    def unload(self) -> None:
        """Call `exit` on every plugin and forget them."""
        for plug in self.plugins.values():
            plug.exit()
        self.plugins.clear()
        self.by_keyword.clear()

    def keywords(self) -> list[str]:
        """Action keywords of the loaded plugins, wildcard excluded."""
        return [plug.action_keyword for plug in self.plugins.values() if not plug.is_wildcard]

    def route(self, query: Query) -> list[Plugin]:
        """Return the plugins which should answer `query`."""
        if not query.terms:
            return []
        plug = self.by_keyword.get(query.action_keyword.lower())
        if plug is not None:
            return [plug]
        return [plug for plug in self.plugins.values() if plug.is_wildcard]

    def query(self, raw: str) -> list[Suggestion]:
        """Return the suggestions for the raw input line."""
        query = Query.parse(raw)
        results: list[Suggestion] = []
        for plug in self.route(query):
            results.extend(plug.query(query))
        self.log.debug("%r -> %d result(s)", raw, len(results))
        return results
