"""Integration (alert channel) models"""

from typing import Any, Optional

from pydantic import Field

from uptimekit.domain.models.base import WireModel
from uptimekit.domain.models.tolerant import TolerantID


class Integration(WireModel):
    """Integration as returned by the API"""

    id: int
    name: Optional[str] = Field(None, alias="friendlyName")
    type: str = ""
    status: Optional[str] = None
    value: Optional[str] = None
    webhook_url: Optional[str] = Field(None, alias="webhookURL")
    custom_value: Optional[str] = None
    enable_notifications_for: TolerantID = ""
    ssl_expiration_reminder: Optional[bool] = None
    send_as_json: Optional[bool] = Field(None, alias="sendAsJSON")
    send_as_query_string: Optional[bool] = None
    post_value: Optional[str] = None
    priority: Optional[str] = None


class IntegrationData(WireModel):
    """Fields shared by every integration type"""

    friendly_name: Optional[str] = None
    enable_notifications_for: Optional[str] = None
    ssl_expiration_reminder: Optional[bool] = None


class SlackIntegrationData(IntegrationData):
    webhook_url: str = Field(alias="webhookURL")
    custom_value: Optional[str] = None


class DiscordIntegrationData(IntegrationData):
    webhook_url: str = Field(alias="webhookURL")
    custom_value: Optional[str] = None


class WebhookIntegrationData(IntegrationData):
    url_to_notify: str
    post_value: str = ""
    custom_value: Optional[str] = None
    send_as_query_string: Optional[bool] = None
    send_as_json: Optional[bool] = Field(None, alias="sendAsJSON")
    send_as_post_parameters: Optional[bool] = None


class TelegramIntegrationData(IntegrationData):
    custom_value: str  # chat ID


class PushoverIntegrationData(IntegrationData):
    user_key: str
    priority: Optional[str] = None  # Lowest|Low|Normal|High|Emergency


class PushbulletIntegrationData(IntegrationData):
    access_token: str


class IntegrationRequest(WireModel):
    """Body of POST /integrations and PATCH /integrations/{id}

    ``data`` is one of the typed payloads above or a plain mapping for types
    without a dedicated model.
    """

    type: str
    data: Any
