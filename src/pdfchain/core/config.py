"""
Configuration Management
========================

TOML-based configuration for pdfchain.

Configuration files are searched in the following order (highest to lowest priority):
1. Path specified via --config option
2. ./pdfchain.toml (current directory)
3. ~/.config/pdfchain/config.toml (user config)
4. /etc/pdfchain/config.toml (system config)
5. Built-in defaults

Example configuration file (pdfchain.toml):

    [pipeline]
    min_tools = 2
    output_name = "pipeline-output.pdf"

    [presets]
    file = "my_presets.toml"

    [logging]
    level = "INFO"

    [output]
    format = "table"
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pdfchain.core.exceptions import ConfigError
from pdfchain.core.logger import get_logger

logger = get_logger(__name__)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


DEFAULT_CONFIG: Dict[str, Any] = {
    "pipeline": {
        "min_tools": 2,
        "output_name": "pipeline-output.pdf",
    },
    "presets": {
        "file": "",
    },
    "logging": {
        "level": "INFO",
    },
    "output": {
        "format": "table",  # "table" or "json"
    },
}

# Standard config file locations, highest priority first
CONFIG_LOCATIONS = [
    Path("pdfchain.toml"),
    Path("~/.config/pdfchain/config.toml").expanduser(),
    Path("/etc/pdfchain/config.toml"),
]


@dataclass
class Config:
    """
    Configuration container for pdfchain settings.

    Attributes:
        pipeline: Pipeline start gate and final artifact naming
        presets: Location of an additional presets file
        logging: Logging settings
        output: CLI output settings
        _source: Path to the config file that was loaded
    """

    pipeline: Dict[str, Any] = field(default_factory=dict)
    presets: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    output: Dict[str, Any] = field(default_factory=dict)
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
            "pipeline": self.pipeline,
            "presets": self.presets,
            "logging": self.logging,
            "output": self.output,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "Config":
        """Create Config from dictionary."""
        return cls(
            pipeline=data.get("pipeline", {}),
            presets=data.get("presets", {}),
            logging=data.get("logging", {}),
            output=data.get("output", {}),
            _source=source,
        )


def load_toml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a TOML file.

    Args:
        filepath: Path to the TOML file

    Returns:
        Dictionary with the parsed values

    Raises:
        FileNotFoundError: If file doesn't exist
        ConfigError: If TOML parsing fails
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}", {"path": str(path)}) from e


def save_toml(config: Dict[str, Any], filepath: Union[str, Path]) -> str:
    """
    Save configuration to a TOML file.

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
        if isinstance(values, dict) and values:
            lines.append(f"[{section}]")
            for key, value in values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
                elif isinstance(value, list):
                    items = ", ".join(f'"{v}"' if isinstance(v, str) else str(v) for v in value)
                    lines.append(f"{key} = [{items}]")
            lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")

    return str(path)


def find_config_file(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Find the configuration file to use.

    Args:
        config_path: Explicit path to config file (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if config_path:
        path = Path(config_path)
        if path.exists():
            return path
        logger.warning(f"Specified config file not found: {config_path}")
        return None

    for location in CONFIG_LOCATIONS:
        if location.exists():
            return location

    return None


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config.from_dict(_deep_copy_dict(DEFAULT_CONFIG))


def create_default_config_file(filepath: Optional[str] = None) -> str:
    """
    Create a default configuration file.

    Args:
        filepath: Path to create the file (default: ./pdfchain.toml)

    Returns:
        Path to the created file
    """
    if filepath is None:
        filepath = "pdfchain.toml"

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

    Args:
        explicit_path: Explicit config file path (highest priority)

    Returns:
        Config object with merged settings from all sources
    """
    config_data = _deep_copy_dict(DEFAULT_CONFIG)
    source = "defaults"

    # lowest priority first so later files override
    for location in reversed(get_config_locations()):
        if location.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(location))
                source = str(location)
                logger.debug(f"Merged configuration from {location}")
            except (OSError, ConfigError) as e:
                logger.warning(f"Error loading {location}: {e}")

    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(path))
                source = str(path)
                logger.debug(f"Merged configuration from {path}")
            except (OSError, ConfigError) as e:
                logger.warning(f"Error loading {path}: {e}")
        else:
            logger.warning(f"Specified config file not found: {explicit_path}")

    return Config.from_dict(config_data, source=source)
