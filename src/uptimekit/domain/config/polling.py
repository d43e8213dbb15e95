"""Deletion polling configuration model."""

from pydantic import BaseModel, Field, model_validator


class PollingConfig(BaseModel):
    """Configuration for delete-confirmation polling.

    Attributes:
        initial_interval: Delay in seconds after the first poll
        max_interval: Ceiling for the doubling delay between polls
        delete_timeout: Default time budget in seconds for a wait
    """

    initial_interval: float = Field(0.5, gt=0.0)
    max_interval: float = Field(10.0, gt=0.0)
    delete_timeout: float = Field(120.0, gt=0.0)

    @model_validator(mode="after")
    def _check_interval_order(self) -> "PollingConfig":
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval must be >= initial_interval")
        return self
