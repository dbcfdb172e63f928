"""Shared constants for paltree."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_ICON",
    "MAX_SUBTITLE_LENGTH",
    "MAIN_SECTION",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "paltree" / "config.toml"

# Name of the application's own config section
MAIN_SECTION = "paltree"

DEFAULT_ICON = "images/icon.png"

# Subtitles are truncated in the terminal host
MAX_SUBTITLE_LENGTH = 60
