"""Configuration management"""

from .config_loader import ConfigError, ConfigLoader
from .extraction_config import AppConfig, ExtractionSettings, LoggingConfig

__all__ = ["AppConfig", "ConfigError", "ConfigLoader", "ExtractionSettings", "LoggingConfig"]
