"""Discovery and validation of the pstattach JSON config file."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .extraction_config import AppConfig

CONFIG_ENV_VAR = "PSTATTACH_CONFIG"


class ConfigError(Exception):
    """Raised when a config file is not valid JSON or fails validation."""

    pass


class ConfigLoader:
    """
    Locate, parse and cache the application config.

    Lookup order: explicit path, then $PSTATTACH_CONFIG, then the
    DEFAULT_CONFIG_PATHS; built-in defaults apply when none exists.
    """

    DEFAULT_CONFIG_PATHS = [
        Path("~/.pstattach/config.json"),
        Path("config/pstattach.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Optional custom config file path
        """
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    def find_config_file(self) -> Optional[Path]:
        """
        Resolve the config file to read.

        Returns:
            Expanded path of the config file, or None to use defaults

        Raises:
            FileNotFoundError: If an explicitly requested file does not exist
        """
        requested = self.config_path
        if requested is None and os.environ.get(CONFIG_ENV_VAR):
            requested = Path(os.environ[CONFIG_ENV_VAR])

        if requested is not None:
            path = requested.expanduser()
            if not path.is_file():
                raise FileNotFoundError(f"Config file not found: {requested}")
            return path

        for candidate in self.DEFAULT_CONFIG_PATHS:
            path = candidate.expanduser()
            if path.is_file():
                return path

        return None

    @staticmethod
    def parse_config_file(path: Path) -> AppConfig:
        """
        Parse and validate one config file.

        Raises:
            ConfigError: If the file is not a valid config
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                return AppConfig(**json.load(f))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise ConfigError(f"Invalid config in {path}: {e}")

    def load_app_config(self) -> AppConfig:
        """
        Return the application config, reading it on first use.

        Returns:
            AppConfig from the resolved file, or defaults

        Raises:
            FileNotFoundError: If an explicitly requested file does not exist
            ConfigError: If config is invalid
        """
        if self._config is None:
            path = self.find_config_file()
            if path is None:
                self._config = AppConfig()
            else:
                self._config = self.parse_config_file(path)
        return self._config

    def reload(self) -> AppConfig:
        """Drop the cached config and read it again."""
        self._config = None
        return self.load_app_config()
