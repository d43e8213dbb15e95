"""Tests for CLI interface"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner

from uptimekit.cli import _die, cli, setup_logging
from uptimekit.domain.models.monitor import Monitor
from uptimekit.infrastructure.config.config_manager import ConfigurationError
from uptimekit.infrastructure.errors import APIStatusError, DeleteTimeoutError


class TestSetupLogging:
    """Tests for setup_logging function"""

    def test_setup_logging_info_level(self):
        """Test that logging is set to INFO level by default"""
        setup_logging(verbose=False)
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug_level(self):
        """Test that logging is set to DEBUG level when verbose"""
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING


class TestDie:
    """Tests for _die function"""

    def test_die_without_exception(self):
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=False)

    def test_die_with_exception_verbose(self):
        exc = ValueError("Test exception")
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=True, exc=exc)


@pytest.fixture
def mock_client():
    """Patch config loading and the API facade used by the CLI"""
    with patch("uptimekit.cli.ConfigManager") as mock_config_manager, patch(
        "uptimekit.cli.UptimeRobotClient"
    ) as mock_client_cls:
        mock_config_manager.return_value = MagicMock()
        client = MagicMock()
        mock_client_cls.from_config.return_value = client
        yield client


class TestGetCommand:
    def test_get_prints_redacted_json(self, mock_client):
        mock_client.resource.return_value.get.return_value = Monitor.model_validate(
            {"id": 5, "friendlyName": "site", "httpPassword": "hunter2"}
        )

        result = CliRunner().invoke(cli, ["get", "monitor", "5"])

        assert result.exit_code == 0, result.output
        mock_client.resource.assert_called_once_with("monitor")
        mock_client.resource.return_value.get.assert_called_once_with(5)
        data = json.loads(result.output)
        assert data["id"] == 5
        assert data["friendlyName"] == "site"
        assert data["httpPassword"] == "***REDACTED***"
        assert "hunter2" not in result.output

    def test_get_unknown_resource(self, mock_client):
        result = CliRunner().invoke(cli, ["get", "alert-contact", "5"])
        assert result.exit_code == 2

    def test_get_api_error(self, mock_client):
        mock_client.resource.return_value.get.side_effect = APIStatusError(404, "not found")

        result = CliRunner().invoke(cli, ["get", "psp", "5"])

        assert result.exit_code == 1
        assert "status 404" in result.output


class TestListMonitors:
    def test_lists_monitors(self, mock_client):
        mock_client.monitors.list.return_value = [
            Monitor(id=1, name="alpha", status="UP"),
            Monitor(id=2, name="beta", status="PAUSED"),
        ]

        result = CliRunner().invoke(cli, ["list-monitors"])

        assert result.exit_code == 0, result.output
        assert "1\tUP\talpha" in result.output
        assert "2\tPAUSED\tbeta" in result.output
        assert "2 monitors" in result.output


class TestDeleteCommand:
    def test_delete_without_wait(self, mock_client):
        api = mock_client.resource.return_value

        result = CliRunner().invoke(cli, ["delete", "integration", "9"])

        assert result.exit_code == 0, result.output
        api.delete.assert_called_once_with(9)
        api.wait_deleted.assert_not_called()
        assert "Deleted integration 9" in result.output

    def test_delete_with_wait(self, mock_client):
        api = mock_client.resource.return_value

        result = CliRunner().invoke(cli, ["delete", "maintenance-window", "9", "--wait", "--timeout", "5"])

        assert result.exit_code == 0, result.output
        api.wait_deleted.assert_called_once_with(9, timeout=5.0)

    def test_delete_wait_timeout(self, mock_client):
        api = mock_client.resource.return_value
        api.wait_deleted.side_effect = DeleteTimeoutError("/monitors/9", 4)

        result = CliRunner().invoke(cli, ["delete", "monitor", "9", "--wait"])

        assert result.exit_code == 1
        assert "timeout waiting for delete of /monitors/9 after 4 polls" in result.output


class TestMonitorToggles:
    def test_pause(self, mock_client):
        result = CliRunner().invoke(cli, ["pause", "3"])
        assert result.exit_code == 0, result.output
        mock_client.monitors.pause.assert_called_once_with(3)

    def test_start(self, mock_client):
        result = CliRunner().invoke(cli, ["start", "3"])
        assert result.exit_code == 0, result.output
        mock_client.monitors.start.assert_called_once_with(3)


class TestClientCreation:
    def test_configuration_error_reported(self):
        with patch("uptimekit.cli.ConfigManager", side_effect=ConfigurationError("bad retry.jitter")):
            result = CliRunner().invoke(cli, ["pause", "3"])

        assert result.exit_code == 1
        assert "bad retry.jitter" in result.output

    def test_missing_api_key_reported(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(cli, ["list-monitors"])

        assert result.exit_code == 1
        assert "API key is required" in result.output


class TestRedactCommand:
    def test_redacts_file(self, tmp_path):
        path = tmp_path / "payload.json"
        path.write_text('{"apiKey": "abc", "name": "ok"}', encoding="utf-8")

        result = CliRunner().invoke(cli, ["redact", str(path)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"apiKey": "***REDACTED***", "name": "ok"}

    def test_max_bytes_clips(self, tmp_path):
        path = tmp_path / "payload.json"
        path.write_text(json.dumps({"items": list(range(500))}), encoding="utf-8")

        result = CliRunner().invoke(cli, ["redact", str(path), "--max-bytes", "64"])

        assert result.exit_code == 0, result.output
        assert "bytes clipped]" in result.output


class TestErrorOutput:
    def test_status_body_not_echoed_or_logged(self, mock_client, caplog):
        mock_client.resource.return_value.get.side_effect = APIStatusError(
            500, '{"password": "hunter2-SECRET"}'
        )

        result = CliRunner().invoke(cli, ["get", "monitor", "5"])

        assert result.exit_code == 1
        assert "status 500" in result.output
        assert "hunter2-SECRET" not in result.output
        assert "hunter2-SECRET" not in caplog.text
