"""
Well-known file locations.
"""

import os
from pathlib import Path

APP_DIR_NAME = "zenith"


def config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/zenith`` (``~/.config/zenith`` when unset)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if not base:
        base = str(Path.home() / ".config")
    return Path(base).expanduser() / APP_DIR_NAME


def default_config_path() -> Path:
    return config_dir() / "config.yaml"


def default_store_path() -> Path:
    return config_dir() / "todos.json"
