"""Configuration manager for watermarker."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from watermarker.config.defaults import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


class ConfigManager:
    """Manages configuration loading and access.

    Configuration is read from a YAML file and merged over DEFAULT_CONFIG,
    so every key documented in the defaults is always available. Values are
    accessed with dot notation.

    Attributes:
        config: Dictionary containing all configuration values
        config_path: Path to the loaded configuration file (None when running
            on defaults only)

    Examples:
        >>> config = ConfigManager.load("config.yaml")
        >>> print(config.get("banner.font_family"))
        'Arial'
        >>> print(config.get("output.quality"))
        85
    """

    def __init__(self, config: Dict[str, Any], config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config: Configuration dictionary
            config_path: Path to the configuration file (optional)
        """
        self.config = config
        self.config_path = config_path

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "ConfigManager":
        """Load configuration from file, falling back to defaults.

        When config_path is given the file must exist. Otherwise the standard
        locations are searched and, if none holds a config.yaml, the
        defaults are used as-is. Nothing is ever written to disk.

        Args:
            config_path: Path to configuration file (optional)

        Returns:
            ConfigManager instance with loaded configuration

        Raises:
            ConfigError: If configuration cannot be loaded or parsed
        """
        if config_path:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigError(f"Configuration file not found: {path}")
        else:
            path = cls._find_config_file()

        if path is None:
            logger.debug("No configuration file found, using defaults")
            return cls(copy.deepcopy(DEFAULT_CONFIG))

        logger.info(f"Loading configuration from: {path}")
        config = cls._merge_with_defaults(cls._load_yaml(path))
        return cls(config, path)

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "ConfigManager":
        """Create a configuration from defaults plus in-memory overrides.

        Args:
            overrides: Partial configuration dictionary

        Returns:
            ConfigManager instance
        """
        return cls(cls._merge_with_defaults(overrides))

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for config.yaml in standard locations.

        Search order:
        1. ~/.watermarker/config.yaml (user home directory - primary location)
        2. ./config.yaml (current directory)

        Returns:
            Path to config file if found, None otherwise
        """
        search_paths = [
            Path.home() / ".watermarker" / "config.yaml",
            Path.cwd() / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                logger.debug(f"Found config file: {path}")
                return path

        return None

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse YAML configuration: {path}\n"
                f"Error: {e}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file: {path}\n"
                f"Error: {e}"
            ) from e

        # An empty file is a valid "use the defaults" configuration
        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigError(
                f"Invalid configuration file: {path}\n"
                "Configuration must be a YAML dictionary."
            )

        return config

    @staticmethod
    def _merge_with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge loaded config with defaults to add any missing fields.

        User config values take precedence over defaults. This only adds
        missing keys from defaults, never overwrites user values.

        Args:
            config: Loaded configuration dictionary

        Returns:
            Merged configuration with defaults
        """
        def deep_merge(base: dict, updates: dict) -> dict:
            """Recursively merge two dictionaries, with updates taking precedence."""
            result = copy.deepcopy(base)
            for key, value in updates.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        return deep_merge(DEFAULT_CONFIG, config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "banner.font_family")
            default: Default value to return if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("owner.full_name")
            'Lasse Vågsæther Karlsen'
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        value = self._get_nested_value(self.config, key)
        return value if value is not None else default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "output.quality")
            value: Value to set
        """
        self._set_nested_value(self.config, key, value)

    def section(self, key: str) -> Dict[str, Any]:
        """Get a whole configuration section as a dictionary.

        Used for sections whose own keys may contain dots, such as
        ``replacements`` (lens names like "EF 50mm f/1.8 II").

        Args:
            key: Section name

        Returns:
            Copy of the section, or an empty dict when absent or not a mapping
        """
        value = self.config.get(key)
        if not isinstance(value, dict):
            return {}
        return dict(value)

    @staticmethod
    def _get_nested_value(config: Dict[str, Any], key: str) -> Any:
        """Get value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-separated key path

        Returns:
            Value at key path, or None if not found
        """
        keys = key.split(".")
        value = config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    @staticmethod
    def _set_nested_value(config: Dict[str, Any], key: str, value: Any) -> None:
        """Set value in nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-separated key path
            value: Value to set
        """
        keys = key.split(".")
        current = config

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary.

        Returns:
            Configuration dictionary
        """
        return copy.deepcopy(self.config)

    def __repr__(self) -> str:
        """Return string representation of configuration."""
        path_str = f" from {self.config_path}" if self.config_path else ""
        return f"<ConfigManager{path_str}>"
