"""Diagnostics configuration model."""

from pydantic import BaseModel, Field


class DiagnosticsConfig(BaseModel):
    """Size limits for redacted bodies written to debug logs.

    Attributes:
        request_body_max_bytes: Budget for logged request bodies (0 = no clipping)
        response_body_max_bytes: Budget for logged response bodies (0 = no clipping)
    """

    request_body_max_bytes: int = Field(2048, ge=0)
    response_body_max_bytes: int = Field(4096, ge=0)
