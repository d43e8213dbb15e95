"""Configuration manager for loading and validating .uptimekit.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from uptimekit.domain.config import (
    ApiConfig,
    AppConfig,
    DiagnosticsConfig,
    PollingConfig,
    RetryConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".uptimekit.yml"

API_KEY_ENV = "UPTIMEROBOT_API_KEY"
API_URL_ENV = "UPTIMEROBOT_API_URL"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, descending into nested mappings"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic error as one "  - section.field: message" line per failure"""
    lines = ["Configuration validation failed:"]
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        lines.append(f"  - {location}: {item['msg']}")
    return "\n".join(lines)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find .uptimekit.yml in ``start`` (default: cwd) or any parent directory

    Returns:
        Path to config file or None if not found
    """
    start = start or Path.cwd()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            logger.info(f"Found config file: {candidate}")
            return candidate
    logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
    return None


class ConfigManager:
    """Manages configuration from .uptimekit.yml and environment variables

    Loads configuration with validation using Pydantic models. Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .uptimekit.yml file (searched from current directory upwards)
    3. Environment variables (UPTIMEROBOT_API_URL; UPTIMEROBOT_API_KEY only if the file has no key)
    4. CLI arguments (handled by CLI layer)
    """

    def __init__(self, config_path: Optional[Union[Path, str]] = None):
        """Initialize config manager

        Args:
            config_path: Path to .uptimekit.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If the file cannot be read or validation fails
        """
        self.config_path = Path(config_path) if config_path else find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            raise ConfigurationError(format_validation_error(e)) from e

    def _read_file(self) -> Dict[str, Any]:
        """Read the YAML config file

        Returns:
            Parsed mapping ({} when there is no file or it is empty)

        Raises:
            ConfigurationError: If the file is unreadable, malformed or not a mapping
        """
        if not self.config_path or not self.config_path.exists():
            return {}
        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {self.config_path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {self.config_path} must contain a mapping")
        logger.info(f"Loaded configuration from {self.config_path}")
        return data

    def _load_config(self) -> AppConfig:
        """Merge defaults, file and environment, then validate

        Raises:
            ValidationError: If configuration is invalid
            ConfigurationError: If the file cannot be parsed
        """
        defaults = copy.deepcopy(AppConfig().model_dump())
        merged = deep_merge(defaults, self._read_file())
        return AppConfig(**self._apply_env_overrides(merged))

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to the ``api`` section"""
        api = config.get("api")
        if not isinstance(api, dict):
            # Left for validation to reject
            return config

        url = os.getenv(API_URL_ENV)
        if url:
            api["url"] = url

        key = os.getenv(API_KEY_ENV)
        if key and not api.get("api_key"):
            api["api_key"] = key

        return config

    def get_api_config(self) -> ApiConfig:
        return self.config.api

    def get_retry_config(self) -> RetryConfig:
        """Get retry configuration

        Returns:
            Retry configuration model
        """
        return self.config.retry

    def get_polling_config(self) -> PollingConfig:
        return self.config.polling

    def get_diagnostics_config(self) -> DiagnosticsConfig:
        return self.config.diagnostics

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key (e.g. "retry.max_attempts")

        Returns:
            Configuration value or default
        """
        node: Any = self.config.model_dump()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node
