"""Configuration management for watermarker."""

from watermarker.config.manager import ConfigManager, ConfigError
from watermarker.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigManager", "ConfigError", "DEFAULT_CONFIG"]
