"""UptimeRobot API facade"""

import logging
from typing import Dict, Optional

from uptimekit.domain.config.app import AppConfig
from uptimekit.domain.config.polling import PollingConfig
from uptimekit.infrastructure.crud import CRUDResource
from uptimekit.infrastructure.http_client import APIClient
from uptimekit.infrastructure.uptimerobot.integrations import IntegrationsAPI
from uptimekit.infrastructure.uptimerobot.maintenance_windows import MaintenanceWindowsAPI
from uptimekit.infrastructure.uptimerobot.monitors import MonitorsAPI
from uptimekit.infrastructure.uptimerobot.psps import PSPsAPI

logger = logging.getLogger(__name__)


class UptimeRobotClient:
    """One request executor shared by the resource APIs"""

    RESOURCES = ("monitor", "psp", "integration", "maintenance-window")

    def __init__(self, api: APIClient, polling: Optional[PollingConfig] = None):
        self.api = api
        self.monitors = MonitorsAPI(api, polling=polling)
        self.psps = PSPsAPI(api, polling=polling)
        self.integrations = IntegrationsAPI(api, polling=polling)
        self.maintenance_windows = MaintenanceWindowsAPI(api, polling=polling)

    @classmethod
    def from_config(cls, config: AppConfig) -> "UptimeRobotClient":
        """Create a client from application configuration

        Raises:
            ValueError: If no API key is configured or set in the environment
        """
        api = APIClient(
            api_key=config.api.api_key,
            base_url=config.api.url,
            timeout=config.api.timeout,
            user_agent=config.api.user_agent,
            headers=config.api.headers,
            retry_config=config.retry,
            diagnostics=config.diagnostics,
        )
        return cls(api, polling=config.polling)

    def resource(self, name: str) -> CRUDResource:
        """Look up a resource API by its singular name

        Raises:
            ValueError: If the resource name is not supported
        """
        apis: Dict[str, CRUDResource] = {
            "monitor": self.monitors,
            "psp": self.psps,
            "integration": self.integrations,
            "maintenance-window": self.maintenance_windows,
        }
        key = name.lower()
        if key not in apis:
            available = ", ".join(self.RESOURCES)
            raise ValueError(f"Unknown resource: {name}. Available resources: {available}")
        return apis[key]
