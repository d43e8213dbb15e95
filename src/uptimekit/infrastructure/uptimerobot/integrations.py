"""Integrations API"""

from typing import Optional

from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.models.integration import Integration
from uptimekit.infrastructure.crud import CRUDResource
from uptimekit.infrastructure.http_client import APIClient


class IntegrationsAPI(CRUDResource[Integration]):
    """Operations on /integrations"""

    def __init__(self, client: APIClient, polling: Optional[PollingConfig] = None, **kwargs):
        super().__init__(client, "/integrations", Integration, polling=polling, **kwargs)
