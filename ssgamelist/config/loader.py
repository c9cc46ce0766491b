"""Configuration loading and parsing."""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_CONFIG_NAME = "ssgamelist.yaml"

DEFAULTS: Dict[str, Any] = {
    'paths': {
        'gamelist': None,
        'roms': None,
        'reference_dat': None,
    },
    'scanner': {
        'rom_extension': 'zip',
    },
    'export': {
        'format': 'native',
        'language': 'en',
    },
    'logging': {
        'level': 'INFO',
        'console': True,
        'file': None,
    },
}


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and parse configuration file.

    Args:
        config_path: Path to ssgamelist.yaml. If None, uses ./ssgamelist.yaml
                     when present and built-in defaults otherwise.

    Returns:
        Configuration dictionary (file values merged over defaults)

    Raises:
        ConfigError: If config file cannot be loaded or parsed
    """
    if config_path is None:
        path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not path.exists():
            return copy.deepcopy(DEFAULTS)
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

    # Load YAML
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except Exception as e:
        raise ConfigError(f"Failed to read config file: {e}")

    # Empty file means defaults
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    return merge_config(DEFAULTS, config)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override into a copy of base.

    Nested dictionaries are merged key by key, other values replaced.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = value
    return result


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'export.language')
        default: Default value if path not found

    Returns:
        Configuration value or default

    Example:
        >>> get_config_value(config, 'export.format')
        'native'
    """
    keys = path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
