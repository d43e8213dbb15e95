"""API connection configuration model."""

from typing import Dict, Optional

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.uptimerobot.com/v3"


class ApiConfig(BaseModel):
    """Configuration for the UptimeRobot API connection.

    Attributes:
        url: Base URL of the versioned REST API
        api_key: API key (None = from UPTIMEROBOT_API_KEY env)
        timeout: Per-request transport timeout in seconds
        user_agent: User-Agent sent on every request (None = requests default)
        headers: Extra default headers, applied in order on every request
    """

    url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    timeout: float = Field(30.0, gt=0.0)
    user_agent: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
