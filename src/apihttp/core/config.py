"""
Configuration Management
========================

This module provides TOML-based configuration file support for apihttp.

Configuration files are merged in the following order (highest to lowest priority):
1. Path specified via --config option
2. ./apihttp.toml (current directory)
3. ~/.config/apihttp/config.toml (user config)
4. /etc/apihttp/config.toml (system config)
5. Built-in defaults

Example configuration file (apihttp.toml):

    [transport]
    base_url = "https://api.example.com"
    timeout = 30

    [logging]
    level = "WARNING"
    log_data_payloads = false
    log_request_headers = false

    [headers]
    Accept = "application/json"

    [auth]
    authorization = "Bearer abc123"
    x_authorization = ""

    [request_id]
    enabled = false
    header = "X-Request-ID"
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# Use tomli for Python < 3.11, tomllib for Python >= 3.11
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "transport": {
        "base_url": "",
        "timeout": 30,
    },
    "logging": {
        "level": "WARNING",
        "log_data_payloads": False,
        "log_request_headers": False,
    },
    "headers": {},
    "auth": {
        "authorization": "",
        "x_authorization": "",
    },
    "request_id": {
        "enabled": False,
        "header": "X-Request-ID",
    },
}

# Standard config file locations
CONFIG_LOCATIONS = [
    Path("apihttp.toml"),
    Path("~/.config/apihttp/config.toml").expanduser(),
    Path("/etc/apihttp/config.toml"),
]


@dataclass
class Config:
    """
    Configuration container for apihttp settings.

    Attributes:
        transport: Transport settings (base URL, passthrough timeout)
        logging: Log level and request/response logging flags
        headers: Static override headers merged into every request
        auth: Initial Authorization / X-Authorization values
        request_id: Request-ID header settings
        _source: Path to the config file that was loaded
    """

    transport: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, Any] = field(default_factory=dict)
    auth: Dict[str, Any] = field(default_factory=dict)
    request_id: Dict[str, Any] = field(default_factory=dict)
    _source: Optional[str] = None

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        section_dict = getattr(self, section, {})
        if section_dict is None:
            return default
        return section_dict.get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a configuration value."""
        section_dict = getattr(self, section, None)
        if section_dict is not None:
            section_dict[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "transport": self.transport,
            "logging": self.logging,
            "headers": self.headers,
            "auth": self.auth,
            "request_id": self.request_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "Config":
        """Create Config from dictionary."""
        return cls(
            transport=data.get("transport", {}),
            logging=data.get("logging", {}),
            headers=data.get("headers", {}),
            auth=data.get("auth", {}),
            request_id=data.get("request_id", {}),
            _source=source,
        )


def load_toml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a TOML configuration file.

    Args:
        filepath: Path to the TOML file

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If file doesn't exist
        tomllib.TOMLDecodeError: If TOML parsing fails
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(path, "rb") as f:
        return tomllib.load(f)


def _format_toml_value(value: Any) -> str:
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return "[" + ", ".join(_format_toml_value(v) for v in value) + "]"
    return str(value)


def save_toml(config: Dict[str, Any], filepath: Union[str, Path]) -> str:
    """
    Save configuration to a TOML file.

    Empty sections are still written so that the file documents every
    section apihttp reads.

    Args:
        config: Configuration dictionary
        filepath: Path to save the file

    Returns:
        Path to the saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    for section, values in config.items():
        if not isinstance(values, dict):
            continue
        lines.append(f"[{section}]")
        for key, value in values.items():
            if value is None or isinstance(value, dict):
                continue
            lines.append(f"{_toml_key(key)} = {_format_toml_value(value)}")
        lines.append("")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))

    return str(path)


def _toml_key(key: str) -> str:
    # Header names such as "X-Api-Key" are valid bare keys; anything else is quoted
    if key and all(c.isalnum() or c in "-_" for c in key):
        return key
    return _format_toml_value(key)


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config.from_dict(_deep_copy_dict(DEFAULT_CONFIG))


def create_default_config_file(filepath: Optional[str] = None) -> str:
    """
    Create a default configuration file.

    Args:
        filepath: Path to create the file (default: ./apihttp.toml)

    Returns:
        Path to the created file
    """
    if filepath is None:
        filepath = "apihttp.toml"

    return save_toml(DEFAULT_CONFIG, filepath)


def _deep_copy_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    """Create a deep copy of a dictionary."""
    result = {}
    for key, value in d.items():
        if isinstance(value, dict):
            result[key] = _deep_copy_dict(value)
        elif isinstance(value, list):
            result[key] = value.copy()
        else:
            result[key] = value
    return result


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries, with override taking precedence."""
    result = _deep_copy_dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


# Global configuration instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config_cascade()
    return _global_config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to None (will reload on next access)."""
    global _global_config
    _global_config = None


def get_config_locations() -> List[Path]:
    """
    Get configuration file search locations in priority order.

    Returns:
        List of paths to search, in priority order (highest first)
    """
    return CONFIG_LOCATIONS.copy()


def load_config_cascade(
    explicit_path: Optional[str] = None,
) -> Config:
    """
    Load configuration with full cascade support.

    Merges configs from all levels in priority order:
    defaults -> system -> user -> current dir -> explicit

    Higher priority configs override lower priority ones.

    Args:
        explicit_path: Explicit config file path (highest priority)

    Returns:
        Config object with merged settings from all sources
    """
    config_data = _deep_copy_dict(DEFAULT_CONFIG)
    source = None

    # Load in reverse order (lowest to highest priority) so higher overrides lower
    for location in reversed(get_config_locations()):
        if location.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(location))
                source = str(location)
                logger.debug(f"Merged configuration from {location}")
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Error loading {location}: {e}")

    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(path))
                source = str(path)
                logger.debug(f"Merged configuration from {path}")
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Error loading {path}: {e}")
        else:
            logger.warning(f"Specified config file not found: {explicit_path}")

    return Config.from_dict(config_data, source=source)
