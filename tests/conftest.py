"""Shared fixtures for calendly_webhooks tests."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from calendly_webhooks.client import API_URL, CalendlyApi
from calendly_webhooks.credentials import CredentialManager

ORGANIZATION = "https://api.calendly.com/organizations/ORG123"


def make_response(
    status_code: int = 200,
    body: Any = None,
    content_type: str | None = "application/json; charset=utf-8",
    method: str = "GET",
    path: str = "/",
) -> httpx.Response:
    """Build a real httpx.Response bound to a request, so raise_for_status works."""
    if body is None:
        content = b""
    elif isinstance(body, (bytes, str)):
        content = body.encode() if isinstance(body, str) else body
    else:
        content = json.dumps(body).encode()

    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(
        status_code,
        headers=headers,
        content=content,
        request=httpx.Request(method, f"{API_URL}{path}"),
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Start and end each test with an unconfigured calendly_webhooks logger."""
    logger = logging.getLogger("calendly_webhooks")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    yield
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def organization():
    """Organization URI the test credentials resolve to."""
    return ORGANIZATION


@pytest.fixture
def credentials():
    """Credential manager with a token and organization set."""
    return CredentialManager.for_testing(
        {"calendly": "test-token", "calendly_organization": ORGANIZATION}
    )


@pytest.fixture
def transport():
    """Stand-in for httpx.Client; set transport.request.return_value per test."""
    mock = MagicMock(spec=httpx.Client)
    mock.request.return_value = make_response(200, {"ok": True})
    return mock


@pytest.fixture
def api(transport, credentials):
    """CalendlyApi wired to the mock transport."""
    return CalendlyApi(client=transport, credentials=credentials)


@pytest.fixture
def response():
    """Factory fixture for httpx responses, see make_response()."""
    return make_response
