"""Configuration file loading.

Handles TOML files, directories of TOML files and `include` directives.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import CONFIG_FILE, MAIN_SECTION
from .models import ConfigError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Loads and merges configuration files.

    Supports:
    - a single TOML file
    - a directory, every `.toml` file in it is merged in name order
    - `include = [...]` in the main section, merging more files or directories
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._config: dict[str, Any] = {}
        self._seen: set[Path] = set()

    @property
    def config(self) -> dict[str, Any]:
        """Return the loaded configuration."""
        return self._config

    def load(self, config_filename: str | Path = "") -> dict[str, Any]:
        """Load configuration from file or directory.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses default CONFIG_FILE location.

        Returns:
            The loaded and merged configuration dictionary.

        Raises:
            ConfigError: If config file not found or has syntax errors.
        """
        self._seen.clear()
        config = self._open_config(config_filename or CONFIG_FILE)
        merge(self._config, config, replace=True)
        return self._config

    def _open_config(self, config_filename: str | Path) -> dict[str, Any]:
        """Load config file(s) into a dictionary, following includes."""
        fname = Path(os.path.expandvars(str(config_filename))).expanduser()
        if fname.resolve() in self._seen:
            self.log.warning("Skipping %s, already included", fname)
            return {}
        self._seen.add(fname.resolve())

        config = self._load_config_directory(fname) if fname.is_dir() else self._load_config_file(fname)

        section = config.get(MAIN_SECTION, {})
        includes = section.get("include", [])
        if isinstance(includes, str):
            includes = [includes]
        for extra_config in includes:
            extra_path = Path(os.path.expandvars(extra_config)).expanduser()
            if not extra_path.is_absolute():
                extra_path = (fname if fname.is_dir() else fname.parent) / extra_path
            merge(config, self._open_config(extra_path))

        return config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory."""
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            msg = f"Config file not found: {fname}"
            raise ConfigError(msg)

        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                msg = f"Invalid TOML in {fname}: {e}"
                raise ConfigError(msg) from e
