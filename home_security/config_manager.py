"""Configuration management with JSON file persistence."""

import json
import os
from dataclasses import asdict, fields
from typing import Optional, Dict, Any

from .config.defaults import DEFAULT_PATHS, VALID_LOG_LEVELS
from .exceptions import ConfigurationError
from .logging_config import get_logger
from .models.config import SecurityConfig

logger = get_logger("config_manager")


class ConfigManager:
    """Manages system configuration with file persistence."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SecurityConfig] = None

        self.load_config()

    def load_config(self) -> SecurityConfig:
        """Load configuration from file or create default.

        Raises:
            ConfigurationError: If the file exists but is malformed or invalid
        """
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                config = SecurityConfig(**config_dict)
            except (OSError, json.JSONDecodeError, TypeError) as e:
                raise ConfigurationError(f"Error loading config {self.config_path}: {e}") from e

            if not self.validate_config(config):
                raise ConfigurationError(f"Invalid configuration in {self.config_path}")
            self._config = config
            logger.debug(f"Loaded configuration from {self.config_path}")
        else:
            self._config = SecurityConfig()
            self.save_config()
            logger.info(f"Wrote default configuration to {self.config_path}")

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        if self._config is None:
            return

        try:
            directory = os.path.dirname(self.config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(self.export_config(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving config {self.config_path}: {e}") from e

    def get_config(self) -> SecurityConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values.

        Raises:
            ConfigurationError: On unknown keys or if the result is invalid
        """
        config = self.get_config()
        known = {f.name for f in fields(SecurityConfig)}
        unknown = set(kwargs) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        candidate = SecurityConfig(**{**asdict(config), **kwargs})
        if not self.validate_config(candidate):
            raise ConfigurationError(f"Invalid configuration values: {kwargs}")

        self._config = candidate
        self.save_config()
        logger.info(f"Configuration updated: {', '.join(sorted(kwargs))}")

    def validate_config(self, config: Optional[SecurityConfig] = None) -> bool:
        """Validate a configuration, the current one by default."""
        config = config or self._config
        if config is None:
            return False

        if not isinstance(config.cat_confidence_threshold, (int, float)):
            return False
        if not 0.0 <= config.cat_confidence_threshold <= 100.0:
            return False

        if not config.state_file:
            return False

        if config.cascade_path is not None and not config.cascade_path:
            return False

        if str(config.log_level).upper() not in VALID_LOG_LEVELS:
            return False

        return True

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        if not self._config:
            return {}
        return asdict(self._config)
