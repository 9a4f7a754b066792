"""Tests for the MCP server entry point."""

import asyncio
import importlib
import sys
from unittest.mock import MagicMock, patch

import pytest


def _import_server():
    sys.modules.pop("calendly_webhooks.mcp_server", None)
    return importlib.import_module("calendly_webhooks.mcp_server")


@pytest.fixture
def server_module(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CALENDLY_API_TOKEN", "test-token")
    monkeypatch.setenv("ORGANIZATION_ID", "org")
    return _import_server()


def test_registers_calendly_tools(server_module):
    assert server_module.tools == [
        "calendly_echo",
        "calendly_create_webhook",
        "calendly_get_webhook",
        "calendly_list_webhooks",
        "calendly_delete_webhook",
    ]


def test_health_route(server_module):
    routes = [route.path for route in server_module.mcp._additional_http_routes]
    assert "/health" in routes

    response = asyncio.run(server_module.health_check(MagicMock()))

    assert response.status_code == 200
    assert response.body == b"OK"


def test_missing_token_warns_at_startup(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CALENDLY_API_TOKEN", raising=False)

    server = _import_server()

    output = capsys.readouterr().out
    assert "WARNING" in output
    assert "calendly_echo requires CALENDLY_API_TOKEN" in output
    assert "Calendly credentials validated" not in output
    assert len(server.tools) == 5


def test_valid_token_logs_validation(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CALENDLY_API_TOKEN", "test-token")

    _import_server()

    assert "Calendly credentials validated" in capsys.readouterr().out


def test_main_stdio(server_module, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["calendly-webhooks-mcp", "--stdio"])

    with patch.object(server_module.mcp, "run") as mock_run:
        server_module.main()

    mock_run.assert_called_once_with(transport="stdio")


def test_main_http_port(server_module, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["calendly-webhooks-mcp", "--port", "8123"])

    with patch.object(server_module.mcp, "run") as mock_run:
        server_module.main()

    mock_run.assert_called_once_with(transport="http", host="0.0.0.0", port=8123)
