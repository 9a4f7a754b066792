"""
Calendly API v2 client for webhook subscriptions.

Supports:
- Token check (GET /echo)
- Create, get, list and delete organization webhook subscriptions

API Reference: https://developer.calendly.com/api-docs
"""

from __future__ import annotations

from typing import Any

import httpx

from .credentials import CredentialManager
from .errors import CalendlyApiError, ErrorKind

API_URL = "https://api.calendly.com"
DEFAULT_TIMEOUT = 30.0

EVENT_CREATED = "invitee.created"
EVENT_CANCELED = "invitee.canceled"
ALLOWED_EVENTS = (EVENT_CREATED, EVENT_CANCELED)

METHOD_GET = "get"
METHOD_POST = "post"
METHOD_DELETE = "delete"

JSON_CONTENT_TYPE = "application/json"


class CalendlyApi:
    """Thin wrapper around an httpx client pointed at the Calendly API."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        credentials: CredentialManager | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._credentials = credentials or CredentialManager()
        self._owns_client = client is None
        if client is None:
            token = self._credentials.get("calendly") or ""
            client = httpx.Client(
                base_url=API_URL,
                headers={"Authorization": f"Bearer {token}"},
                timeout=timeout,
            )
        self._client = client

    def __enter__(self) -> CalendlyApi:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport if this instance created it."""
        if self._owns_client:
            self._client.close()

    def _organization(self) -> str | None:
        # Read on every call so a changed ORGANIZATION_ID is picked up
        return self._credentials.get("calendly_organization")

    def echo(self) -> dict[str, Any]:
        """Test the authentication token."""
        return self.call_api(METHOD_GET, "echo")

    def create_webhook(self, url: str, events: list[str] | None = None) -> dict[str, Any]:
        """
        Create a webhook subscription for the organization.

        Args:
            url: Callback URL Calendly will POST events to.
            events: Event kinds to subscribe to, a subset of ALLOWED_EVENTS.

        Raises:
            CalendlyApiError: With kind VALIDATION if an event kind is unknown;
                no request is sent in that case.
        """
        events = list(events or [])
        if set(events) - set(ALLOWED_EVENTS):
            raise CalendlyApiError(
                "The specified event types do not exist",
                kind=ErrorKind.VALIDATION,
            )

        return self.call_api(
            METHOD_POST,
            "webhook_subscriptions",
            {
                "url": url,
                "events": events,
                "organization": self._organization(),
            },
        )

    def get_webhook(self, webhook_id: str) -> dict[str, Any]:
        """Get a webhook subscription by ID."""
        return self.call_api(
            METHOD_GET,
            f"webhook_subscriptions/{webhook_id}",
            {
                "scope": "organization",
                "organization": self._organization(),
            },
        )

    def get_webhooks(self) -> dict[str, Any]:
        """List the organization's webhook subscriptions."""
        return self.call_api(
            METHOD_GET,
            "webhook_subscriptions",
            {
                "scope": "organization",
                "organization": self._organization(),
            },
        )

    def delete_webhook(self, webhook_id: str) -> None:
        """Delete a webhook subscription. Deleting a missing one is not an error."""
        try:
            self.call_api(METHOD_DELETE, f"webhook_subscriptions/{webhook_id}")
        except CalendlyApiError as e:
            if e.code != 404:
                raise

    def call_api(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send one request and decode the response.

        GET sends ``params`` as the query string, every other verb as a JSON
        body. JSON responses are decoded; anything else is returned as the
        raw httpx.Response.

        Raises:
            CalendlyApiError: On HTTP, transport or JSON decode failures.
        """
        url = f"/{endpoint}"
        params = params or {}

        if method == METHOD_GET:
            # Unset values are left out of the query string
            query = {key: value for key, value in params.items() if value is not None}
            options: dict[str, Any] = {"params": query}
        else:
            options = {"json": params}

        try:
            response = self._client.request(method.upper(), url, **options)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.is_client_error:
                raise self._client_error(e.response) from e
            raise CalendlyApiError(
                f"Failed to get Calendly data: {e}",
                code=e.response.status_code,
                kind=ErrorKind.TRANSPORT,
            ) from e
        except httpx.HTTPError as e:
            raise CalendlyApiError(
                f"Failed to get Calendly data: {e}",
                kind=ErrorKind.TRANSPORT,
            ) from e

        if _is_json(response):
            return _decode(response)
        return response

    def _client_error(self, response: httpx.Response) -> CalendlyApiError:
        """Build the error for a 4xx response. The message is the raw body."""
        body = response.text
        detail = None
        if _is_json(response):
            payload = _decode(response)
            if isinstance(payload, dict) and payload.get("message") is not None:
                detail = str(payload["message"])
        return CalendlyApiError(
            body,
            code=response.status_code,
            kind=ErrorKind.HTTP,
            detail=detail,
        )


def _is_json(response: httpx.Response) -> bool:
    return response.headers.get("content-type", "").startswith(JSON_CONTENT_TYPE)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise CalendlyApiError(
            f"Invalid JSON: {e}",
            code=500,
            kind=ErrorKind.DECODE,
        ) from e
