"""Monitors API"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.models.monitor import Monitor
from uptimekit.infrastructure.crud import CRUDResource, ResourceID, decode_model
from uptimekit.infrastructure.errors import (
    APIError,
    FallbackError,
    FallbackNotFoundError,
    status_code_of,
)
from uptimekit.infrastructure.http_client import APIClient

logger = logging.getLogger(__name__)


class MonitorList(BaseModel):
    monitors: List[Monitor] = Field(default_factory=list)


class MonitorsAPI(CRUDResource[Monitor]):
    """Operations on /monitors"""

    def __init__(self, client: APIClient, polling: Optional[PollingConfig] = None, **kwargs):
        super().__init__(client, "/monitors", Monitor, polling=polling, **kwargs)

    def list(self) -> List[Monitor]:
        """List all monitors visible to the API key"""
        resp = self.client.execute("GET", self.endpoint)
        return decode_model(MonitorList, resp, self.endpoint).monitors

    def get(self, resource_id: ResourceID) -> Monitor:
        """Get a monitor, falling back to the list endpoint on a server error

        Some legacy monitors intermittently fail on the single-resource endpoint
        with 5xx while still being returned by the list endpoint.

        Raises:
            APIError: If the single-resource GET failed with a status below 500
            FallbackError: If the list request failed as well
            FallbackNotFoundError: If the list does not contain the monitor
        """
        try:
            return super().get(resource_id)
        except APIError as e:
            status = status_code_of(e)
            if status is None or status < 500:
                raise
            primary = e

        logger.warning(
            f"GET {self.path(resource_id)} failed with status {status}, "
            f"falling back to {self.endpoint} list"
        )
        try:
            monitors = self.list()
        except APIError as list_error:
            raise FallbackError("monitor", primary, list_error) from primary

        for monitor in monitors:
            if str(monitor.id) == str(resource_id):
                return monitor
        raise FallbackNotFoundError("monitor", primary, resource_id, len(monitors)) from primary

    def pause(self, resource_id: ResourceID) -> None:
        self.client.execute("POST", f"{self.path(resource_id)}/pause")

    def start(self, resource_id: ResourceID) -> None:
        self.client.execute("POST", f"{self.path(resource_id)}/start")

    def reset(self, resource_id: ResourceID) -> None:
        """Reset monitor statistics"""
        self.client.execute("POST", f"{self.path(resource_id)}/reset")

    def find_by_name_and_url(self, name: str, url: str) -> Optional[Monitor]:
        """Find a monitor with exactly this name and URL

        Returns:
            The first match, or None
        """
        for monitor in self.list():
            if monitor.name == name and monitor.url == url:
                return monitor
        return None
