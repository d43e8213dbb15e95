"""Maintenance windows API"""

from typing import Optional

from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.models.maintenance_window import MaintenanceWindow
from uptimekit.infrastructure.crud import CRUDResource
from uptimekit.infrastructure.http_client import APIClient


class MaintenanceWindowsAPI(CRUDResource[MaintenanceWindow]):
    """Operations on /maintenance-windows"""

    def __init__(self, client: APIClient, polling: Optional[PollingConfig] = None, **kwargs):
        super().__init__(
            client, "/maintenance-windows", MaintenanceWindow, polling=polling, **kwargs
        )
