"""UptimeRobot resource APIs"""

from uptimekit.infrastructure.uptimerobot.client import UptimeRobotClient
from uptimekit.infrastructure.uptimerobot.integrations import IntegrationsAPI
from uptimekit.infrastructure.uptimerobot.maintenance_windows import MaintenanceWindowsAPI
from uptimekit.infrastructure.uptimerobot.monitors import MonitorsAPI
from uptimekit.infrastructure.uptimerobot.psps import PSPsAPI

__all__ = [
    "IntegrationsAPI",
    "MaintenanceWindowsAPI",
    "MonitorsAPI",
    "PSPsAPI",
    "UptimeRobotClient",
]
