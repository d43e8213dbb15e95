"""Configuration models with Pydantic validation."""

from uptimekit.domain.config.api import ApiConfig
from uptimekit.domain.config.app import AppConfig
from uptimekit.domain.config.diagnostics import DiagnosticsConfig
from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.config.retry import RetryConfig

__all__ = [
    "AppConfig",
    "ApiConfig",
    "RetryConfig",
    "PollingConfig",
    "DiagnosticsConfig",
]
