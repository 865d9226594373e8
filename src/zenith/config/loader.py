"""
Configuration loader for Zenith
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..utils.errors import ConfigurationError
from ..utils.paths import default_config_path

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_CONFIG: Dict[str, Any] = {
    "bar": {
        "surface": "console",
        "separator": " | ",
    },
    "modules": {
        "clock": True,
        "clock_format": "%H:%M:%S",
        "calendar": True,
        "date_format": "%d %b",
        "first_weekday": 0,
        "system_stats": True,
        "todo": True,
        "todo_storage": None,
        "todo_label_chars": 28,
    },
}

# Expected value types per key; None is accepted where the default is None
SCHEMA: Dict[str, Dict[str, tuple]] = {
    "bar": {
        "surface": (str,),
        "separator": (str,),
    },
    "modules": {
        "clock": (bool,),
        "clock_format": (str,),
        "calendar": (bool,),
        "date_format": (str,),
        "first_weekday": (int,),
        "system_stats": (bool,),
        "todo": (bool,),
        "todo_storage": (str, type(None)),
        "todo_label_chars": (int,),
        "thermal_root": (str,),
        "drm_root": (str,),
    },
}


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


class ConfigLoader:
    """Loads and validates YAML configuration files"""

    def load(self, config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load configuration from a YAML file.

        A missing file is not an error: the defaults are returned.

        Args:
            config_path: Path to YAML file (default: ~/.config/zenith/config.yaml)

        Returns:
            Validated configuration dictionary with defaults applied

        Raises:
            ConfigurationError: If the file is unreadable, too large or invalid
        """
        resolved_path = Path(config_path or default_config_path()).expanduser().resolve()

        if not resolved_path.exists():
            logger.info(f"Config file not found at {resolved_path}, using defaults")
            return default_config()

        config = self._read(resolved_path)
        errors, warnings = self._validate(config)
        for warning in warnings:
            logger.warning(warning)
        if errors:
            raise ConfigurationError(f"Invalid configuration in {resolved_path}: {'; '.join(errors)}")

        logger.info(f"Loaded configuration from {resolved_path}")
        return self._apply_defaults(config or {})

    def validate_file(self, config_path: Union[str, Path]) -> Tuple[bool, List[str], List[str]]:
        """
        Validate a configuration file without loading it into the bar.

        Returns:
            (is_valid, errors, warnings)
        """
        path = Path(config_path).expanduser()
        if not path.exists():
            return False, [f"Configuration file not found: {path}"], []
        try:
            config = self._read(path)
        except ConfigurationError as e:
            return False, [str(e)], []

        errors, warnings = self._validate(config)
        return len(errors) == 0, errors, warnings

    def _read(self, path: Path) -> Any:
        if path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {path}")

        if path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {path.suffix}. "
                f"Expected .yaml or .yml"
            )

        file_size = path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}")

    def _validate(self, config: Any) -> Tuple[List[str], List[str]]:
        """Check structure and value types. An empty file is valid."""
        errors: List[str] = []
        warnings: List[str] = []

        if config is None:
            return errors, warnings
        if not isinstance(config, dict):
            return ["Configuration must be a dictionary"], warnings

        for section, values in config.items():
            if section not in SCHEMA:
                warnings.append(f"Unknown configuration section: {section}")
                continue
            if values is None:
                continue
            if not isinstance(values, dict):
                errors.append(f"'{section}' must be a dictionary")
                continue

            for key, value in values.items():
                expected = SCHEMA[section].get(key)
                if expected is None:
                    warnings.append(f"Unknown key in '{section}': {key}")
                elif isinstance(value, bool) and bool not in expected:
                    errors.append(f"'{section}.{key}' has invalid value {value!r}")
                elif not isinstance(value, expected):
                    errors.append(f"'{section}.{key}' has invalid value {value!r}")

        todo_chars = (config.get("modules") or {}).get("todo_label_chars")
        if isinstance(todo_chars, int) and not isinstance(todo_chars, bool) and todo_chars < 1:
            errors.append("'modules.todo_label_chars' must be at least 1")

        return errors, warnings

    def _apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge user values over the defaults, section by section"""
        merged = default_config()
        for section, values in config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
        return merged
