"""
Utility modules for Zenith.
"""

from .errors import (
    ActionExecutionError,
    ConfigurationError,
    SurfaceError,
    ZenithError,
    error_boundary,
    safe_execute,
)
from .paths import config_dir, default_config_path, default_store_path

__all__ = [
    "ZenithError",
    "ConfigurationError",
    "SurfaceError",
    "ActionExecutionError",
    "error_boundary",
    "safe_execute",
    "config_dir",
    "default_config_path",
    "default_store_path",
]
