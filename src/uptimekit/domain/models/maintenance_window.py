"""Maintenance window models"""

from typing import List, Optional

from uptimekit.domain.models.base import WireModel


class MaintenanceWindow(WireModel):
    """Maintenance window as returned by the API"""

    id: int
    name: str = ""
    interval: str = ""
    date: Optional[str] = None
    time: str = ""
    duration: int = 0
    auto_add_monitors: bool = False
    days: Optional[List[int]] = None
    status: str = ""
    created: str = ""


class CreateMaintenanceWindowRequest(WireModel):
    name: str
    interval: str  # once, daily, weekly, monthly
    time: str
    duration: int
    date: Optional[str] = None
    auto_add_monitors: Optional[bool] = None
    days: Optional[List[int]] = None


class UpdateMaintenanceWindowRequest(WireModel):
    name: Optional[str] = None
    interval: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[int] = None
    date: Optional[str] = None
    auto_add_monitors: Optional[bool] = None
    days: Optional[List[int]] = None
