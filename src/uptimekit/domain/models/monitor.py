"""Monitor models"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from uptimekit.domain.models.base import WireModel
from uptimekit.domain.models.maintenance_window import MaintenanceWindow
from uptimekit.domain.models.tolerant import TolerantID


class MonitorType(str, Enum):
    """Kind of check a monitor performs"""

    HTTP = "HTTP"
    KEYWORD = "KEYWORD"
    PING = "PING"
    PORT = "PORT"
    HEARTBEAT = "HEARTBEAT"
    DNS = "DNS"
    API = "API"


class AlertContactRequest(WireModel):
    alert_contact_id: str
    threshold: Optional[int] = None
    recurrence: Optional[int] = None


class AlertContact(WireModel):
    """Alert contact assignment; the API sends the id as a string or a number"""

    alert_contact_id: TolerantID = ""
    threshold: Optional[int] = None
    recurrence: Optional[int] = None


class Tag(WireModel):
    id: int
    name: str = ""
    color: str = ""


class MonitorConfig(WireModel):
    ssl_expiration_period_days: Optional[List[int]] = None
    dns_records: Optional[Dict[str, List[str]]] = None
    api_assertions: Optional[Dict[str, Any]] = None
    ip_version: Optional[str] = None


class Incident(WireModel):
    id: TolerantID = ""
    status: Any = None
    cause: Optional[int] = None
    reason: str = ""
    started_at: Any = None
    duration: Optional[int] = None


class Monitor(WireModel):
    """Monitor as returned by the API"""

    id: int
    name: str = Field("", alias="friendlyName")
    type: str = ""
    url: str = ""
    interval: int = 0
    status: str = ""
    timeout: Optional[int] = None
    port: Optional[int] = None
    http_method_type: Optional[str] = None
    auth_type: Optional[str] = None
    http_username: Optional[str] = None
    http_password: Optional[str] = None
    custom_http_headers: Optional[Dict[str, str]] = None
    success_http_response_codes: Optional[List[str]] = None
    keyword_type: Optional[str] = None
    keyword_value: Optional[str] = None
    keyword_case_type: Optional[int] = None
    check_ssl_errors: Optional[bool] = Field(None, alias="checkSSLErrors")
    ssl_expiration_reminder: Optional[bool] = None
    domain_expiration_reminder: Optional[bool] = None
    follow_redirections: Optional[bool] = None
    grace_period: Optional[int] = None
    response_time_threshold: Optional[int] = None
    regional_data: Any = None
    group_id: Optional[int] = None
    tags: List[Tag] = Field(default_factory=list)
    assigned_alert_contacts: List[AlertContact] = Field(default_factory=list)
    maintenance_windows: List[MaintenanceWindow] = Field(default_factory=list)
    last_incident_id: TolerantID = ""
    last_incident: Optional[Incident] = None
    config: Optional[MonitorConfig] = None
    create_date_time: Optional[str] = None

    @property
    def is_paused(self) -> bool:
        return self.status.strip().upper() == "PAUSED"


class CreateMonitorRequest(WireModel):
    """Body of POST /monitors"""

    name: str = Field(alias="friendlyName")
    url: str
    type: MonitorType
    interval: int
    timeout: Optional[int] = None
    http_auth_type: Optional[str] = Field(None, alias="authType")
    http_method_type: Optional[str] = None
    http_username: Optional[str] = None
    http_password: Optional[str] = None
    port: Optional[int] = None
    keyword_type: Optional[str] = None
    keyword_value: Optional[str] = None
    keyword_case_type: Optional[int] = None
    assigned_alert_contacts: Optional[List[AlertContactRequest]] = None
    check_ssl_errors: Optional[bool] = Field(None, alias="checkSSLErrors")
    custom_http_headers: Optional[Dict[str, str]] = None
    success_http_response_codes: Optional[List[str]] = None
    maintenance_window_ids: Optional[List[int]] = Field(None, alias="maintenanceWindowsIds")
    tags: List[str] = Field(default_factory=list, alias="tagNames")
    grace_period: Optional[int] = None
    post_value_type: Optional[str] = None
    post_value_data: Any = None
    ssl_expiration_reminder: bool = False
    domain_expiration_reminder: bool = False
    follow_redirections: bool = False
    response_time_threshold: Optional[int] = None
    regional_data: Optional[str] = None
    config: Optional[MonitorConfig] = None
    group_id: Optional[int] = None


class UpdateMonitorRequest(CreateMonitorRequest):
    """Body of PATCH /monitors/{id}; None fields are left unchanged by the API"""

    tags: Optional[List[str]] = Field(None, alias="tagNames")
