"""Tests for integration and maintenance window models"""

import json

from fakes import FakeSession, make_response

from uptimekit.domain.models.integration import (
    Integration,
    IntegrationRequest,
    SlackIntegrationData,
    WebhookIntegrationData,
)
from uptimekit.domain.models.maintenance_window import UpdateMaintenanceWindowRequest
from uptimekit.infrastructure.http_client import APIClient
from uptimekit.infrastructure.uptimerobot.integrations import IntegrationsAPI
from uptimekit.infrastructure.uptimerobot.maintenance_windows import MaintenanceWindowsAPI


def _client(*outcomes):
    session = FakeSession(*outcomes)
    return APIClient(api_key="k", base_url="https://api.example.test/v3", session=session), session


class TestIntegrations:
    def test_typed_payload_wire_names(self):
        client, session = _client(make_response(200, {"id": 11, "type": "Slack"}))
        request = IntegrationRequest(
            type="Slack",
            data=SlackIntegrationData(
                friendly_name="ops", webhook_url="https://hooks.example.test/x", enable_notifications_for="1"
            ),
        )

        created = IntegrationsAPI(client).create(request)

        sent = json.loads(session.calls[0]["data"])
        assert created.id == 11
        assert sent == {
            "type": "Slack",
            "data": {
                "friendlyName": "ops",
                "webhookURL": "https://hooks.example.test/x",
                "enableNotificationsFor": "1",
            },
        }

    def test_webhook_payload(self):
        data = WebhookIntegrationData(url_to_notify="https://example.test/hook", send_as_json=True)
        dumped = data.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"urlToNotify": "https://example.test/hook", "postValue": "", "sendAsJSON": True}

    def test_plain_mapping_payload(self):
        client, session = _client(make_response(200, {"id": 12}))

        IntegrationsAPI(client).update(12, IntegrationRequest(type="Email", data={"value": "a@b.c"}))

        assert session.calls[0]["method"] == "PATCH"
        assert json.loads(session.calls[0]["data"]) == {"type": "Email", "data": {"value": "a@b.c"}}

    def test_decode_numeric_notification_setting(self):
        integration = Integration.model_validate_json(
            '{"id": 3, "friendlyName": "ops", "type": "Webhook", "enableNotificationsFor": 1, "sendAsJSON": true}'
        )
        assert integration.enable_notifications_for == "1"
        assert integration.send_as_json is True
        assert integration.name == "ops"


class TestMaintenanceWindows:
    def test_partial_update(self):
        client, session = _client(make_response(200, {"id": 4, "name": "nightly", "duration": 90}))

        window = MaintenanceWindowsAPI(client).update(4, UpdateMaintenanceWindowRequest(duration=90, auto_add_monitors=False))

        assert window.duration == 90
        assert session.calls[0]["url"] == "https://api.example.test/v3/maintenance-windows/4"
        assert json.loads(session.calls[0]["data"]) == {"duration": 90, "autoAddMonitors": False}
