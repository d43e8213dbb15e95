"""Public status page models"""

from typing import List, Optional

from pydantic import Field, model_validator

from uptimekit.domain.models.base import WireModel
from uptimekit.domain.models.tolerant import TolerantBool


class FontSettings(WireModel):
    family: Optional[str] = None


class PageSettings(WireModel):
    layout: Optional[str] = None
    theme: Optional[str] = None
    density: Optional[str] = None


class ColorSettings(WireModel):
    main: Optional[str] = None
    text: Optional[str] = None
    link: Optional[str] = None


class FeatureSettings(WireModel):
    show_bars: Optional[bool] = None
    show_uptime_percentage: Optional[bool] = None
    enable_floating_status: Optional[bool] = None
    show_overall_uptime: Optional[bool] = None
    show_outage_updates: Optional[bool] = None
    show_outage_details: Optional[bool] = None
    enable_details_page: Optional[bool] = None
    show_monitor_url: Optional[bool] = Field(None, alias="showMonitorURL")
    hide_paused_monitors: Optional[bool] = None


class FeatureSettingsResponse(WireModel):
    """Feature flags as returned by the API, which sends bools or "true"/"false" strings"""

    show_bars: TolerantBool = None
    show_uptime_percentage: TolerantBool = None
    enable_floating_status: TolerantBool = None
    show_overall_uptime: TolerantBool = None
    show_outage_updates: TolerantBool = None
    show_outage_details: TolerantBool = None
    enable_details_page: TolerantBool = None
    show_monitor_url: TolerantBool = Field(None, alias="showMonitorURL")
    hide_paused_monitors: TolerantBool = None


class CustomSettings(WireModel):
    """Custom settings sent with a PSP request.

    The API rejects a ``customSettings`` object whose ``page``, ``colors`` or
    ``features`` is null, so those always serialize as objects.
    """

    font: Optional[FontSettings] = None
    page: Optional[PageSettings] = None
    colors: Optional[ColorSettings] = None
    features: Optional[FeatureSettings] = None

    @model_validator(mode="after")
    def _fill_required_sections(self) -> "CustomSettings":
        if self.page is None:
            self.page = PageSettings()
        if self.colors is None:
            self.colors = ColorSettings()
        if self.features is None:
            self.features = FeatureSettings()
        return self


class CustomSettingsResponse(WireModel):
    font: Optional[FontSettings] = None
    page: Optional[PageSettings] = None
    colors: Optional[ColorSettings] = None
    features: Optional[FeatureSettingsResponse] = None


class PSP(WireModel):
    """Public status page as returned by the API"""

    id: int
    name: str = Field("", alias="friendlyName")
    custom_domain: Optional[str] = None
    is_password_set: bool = False
    monitor_ids: Optional[List[int]] = None
    monitors_count: Optional[int] = None
    status: str = ""
    url_key: str = ""
    homepage_link: Optional[str] = None
    ga_code: Optional[str] = None
    share_analytics_consent: bool = False
    use_small_cookie_consent_modal: bool = False
    icon: Optional[str] = None
    no_index: bool = False
    logo: Optional[str] = None
    hide_url_links: bool = False
    subscription: bool = False
    show_cookie_bar: bool = False
    pinned_announcement_id: Optional[int] = None
    custom_settings: Optional[CustomSettingsResponse] = None


class CreatePSPRequest(WireModel):
    """Body of POST /psps"""

    name: str = Field(alias="friendlyName")
    custom_domain: Optional[str] = None
    password: Optional[str] = None
    monitor_ids: Optional[List[int]] = None
    status: Optional[str] = None
    ga_code: Optional[str] = None
    share_analytics_consent: bool = False
    use_small_cookie_consent_modal: bool = False
    icon: Optional[str] = None
    no_index: bool = False
    logo: Optional[str] = None
    hide_url_links: bool = False
    show_cookie_bar: bool = False
    pinned_announcement_id: Optional[int] = None
    custom_settings: Optional[CustomSettings] = None


class UpdatePSPRequest(WireModel):
    """Body of PATCH /psps/{id}; None fields are left unchanged by the API"""

    name: Optional[str] = Field(None, alias="friendlyName")
    custom_domain: Optional[str] = None
    password: Optional[str] = None
    monitor_ids: Optional[List[int]] = None
    status: Optional[str] = None
    ga_code: Optional[str] = None
    share_analytics_consent: Optional[bool] = None
    use_small_cookie_consent_modal: Optional[bool] = None
    icon: Optional[str] = None
    no_index: Optional[bool] = None
    logo: Optional[str] = None
    hide_url_links: Optional[bool] = None
    show_cookie_bar: Optional[bool] = None
    pinned_announcement_id: Optional[int] = None
    custom_settings: Optional[CustomSettings] = None
