"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from uptimekit.domain.config.api import ApiConfig
from uptimekit.domain.config.diagnostics import DiagnosticsConfig
from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.config.retry import RetryConfig


class AppConfig(BaseModel):
    """Main application configuration.

    This is the root configuration model that aggregates all configuration sections.
    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        api: API connection configuration
        retry: Request retry configuration
        polling: Delete-confirmation polling configuration
        diagnostics: Debug logging limits
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "api": {
                    "url": "https://api.uptimerobot.com/v3",
                    "api_key": None,
                    "timeout": 30.0,
                    "user_agent": "uptimekit/0.1.0",
                    "headers": {"X-Client": "uptimekit"},
                },
                "retry": {
                    "max_attempts": 4,
                    "base_delay": 0.2,
                    "max_exponent": 6,
                    "jitter": 0.25,
                },
                "polling": {
                    "initial_interval": 0.5,
                    "max_interval": 10.0,
                    "delete_timeout": 120.0,
                },
                "diagnostics": {
                    "request_body_max_bytes": 2048,
                    "response_body_max_bytes": 4096,
                },
            }
        },
    )
