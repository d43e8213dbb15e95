"""Retry configuration model."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel):
    """Configuration for request retry logic.

    Attributes:
        max_attempts: Maximum number of attempts per logical call (first try included)
        base_delay: Backoff delay in seconds before the second attempt
        max_exponent: Attempt index at which exponential growth stops
        jitter: Random jitter factor (0.25 = +/-25% of the delay)
    """

    max_attempts: int = Field(4, gt=0, le=10)
    base_delay: float = Field(0.2, ge=0.0)  # Allow 0 for tests
    max_exponent: int = Field(6, ge=0, le=16)
    jitter: float = Field(0.25, ge=0.0, le=1.0)
