"""Public status pages API"""

import logging
from typing import Dict, Optional

from uptimekit.domain.config.polling import PollingConfig
from uptimekit.domain.models.psp import PSP
from uptimekit.infrastructure.crud import CRUDResource, ResourceID, decode_model
from uptimekit.infrastructure.http_client import APIClient

logger = logging.getLogger(__name__)


class PSPsAPI(CRUDResource[PSP]):
    """Operations on /psps

    Request models carry ``customSettings`` normalization themselves (see
    ``CustomSettings``); this class adds the logo/icon upload.
    """

    def __init__(self, client: APIClient, polling: Optional[PollingConfig] = None, **kwargs):
        super().__init__(client, "/psps", PSP, polling=polling, **kwargs)

    def update_files(
        self,
        resource_id: ResourceID,
        logo_path: Optional[str] = None,
        icon_path: Optional[str] = None,
        clear_logo: bool = False,
        clear_icon: bool = False,
    ) -> PSP:
        """Upload or clear the logo and icon of a status page

        The API accepts these assets only as multipart/form-data. An empty field
        clears the asset.

        Args:
            resource_id: Status page ID
            logo_path: Local logo file to upload
            icon_path: Local icon file to upload
            clear_logo: Remove the current logo (ignored if logo_path is set)
            clear_icon: Remove the current icon (ignored if icon_path is set)

        Returns:
            Updated status page

        Raises:
            ValueError: If no change was requested
            APIError: If a file cannot be read or the request fails
        """
        fields: Dict[str, str] = {}
        files: Dict[str, str] = {}
        for name, file_path, clear in (
            ("logo", logo_path, clear_logo),
            ("icon", icon_path, clear_icon),
        ):
            if file_path:
                files[name] = file_path
            elif clear:
                fields[name] = ""

        if not fields and not files:
            raise ValueError("update_files requires a file to upload or an asset to clear")

        logger.debug(
            f"Updating assets of {self.path(resource_id)}: "
            f"upload={sorted(files)}, clear={sorted(fields)}"
        )
        resp = self.client.execute_multipart("PATCH", self.path(resource_id), fields, files)
        return decode_model(PSP, resp, self.path(resource_id))
