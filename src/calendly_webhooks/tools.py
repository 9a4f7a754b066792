"""
Calendly webhook tools for FastMCP.

Each tool wraps one CalendlyApi call and returns a dict: the decoded
response on success, or {"error": ..., "kind": ..., "code": ...} on failure.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
from fastmcp import FastMCP

from .client import CalendlyApi
from .credentials import CredentialManager
from .errors import CalendlyApiError
from .logging import get_logger

logger = get_logger(__name__)


def register_tools(
    mcp: FastMCP,
    credentials: CredentialManager | None = None,
) -> list[str]:
    """Register Calendly webhook tools with the MCP server."""
    creds = credentials or CredentialManager()

    def _missing(cred_name: str, error: str) -> dict[str, str]:
        spec = creds.get_spec(cred_name)
        return {
            "error": error,
            "help": (
                f"Set {spec.env_var} env var or add it to .env "
                f"({spec.description}). See {spec.help_url}"
            ),
        }

    def _get_client(needs_organization: bool = True) -> CalendlyApi | dict[str, str]:
        """Get a Calendly client or return an error dict."""
        if not creds.is_available("calendly"):
            return _missing("calendly", "Calendly credentials not configured")
        if needs_organization and not creds.is_available("calendly_organization"):
            return _missing("calendly_organization", "Calendly organization not configured")
        return CalendlyApi(credentials=creds)

    def _run(
        tool_name: str,
        call: Callable[[CalendlyApi], Any],
        needs_organization: bool = True,
    ) -> dict[str, Any]:
        client = _get_client(needs_organization)
        if isinstance(client, dict):
            return client
        try:
            with client:
                result = call(client)
        except CalendlyApiError as e:
            logger.warning("%s failed (%s, code=%s): %s", tool_name, e.kind.value, e.code, e.message)
            return e.to_dict()

        if isinstance(result, httpx.Response):
            # Non-JSON success bodies are passed through as text
            return {
                "status_code": result.status_code,
                "content_type": result.headers.get("content-type"),
                "text": result.text,
            }
        return result

    @mcp.tool()
    def calendly_echo() -> dict:
        """
        Check that the configured Calendly token is valid.

        Returns:
            Dict echoed back by Calendly, or error
        """
        return _run("calendly_echo", lambda api: api.echo(), needs_organization=False)

    @mcp.tool()
    def calendly_create_webhook(url: str, events: list[str] | None = None) -> dict:
        """
        Create an organization webhook subscription.

        Args:
            url: Callback URL that will receive event notifications
            events: Event kinds to subscribe to: "invitee.created" and/or "invitee.canceled"

        Returns:
            Dict with the created subscription resource, or error
        """
        return _run("calendly_create_webhook", lambda api: api.create_webhook(url, events))

    @mcp.tool()
    def calendly_get_webhook(webhook_id: str) -> dict:
        """
        Get an organization webhook subscription by ID.

        Args:
            webhook_id: Webhook subscription UUID

        Returns:
            Dict with the subscription resource, or error
        """
        return _run("calendly_get_webhook", lambda api: api.get_webhook(webhook_id))

    @mcp.tool()
    def calendly_list_webhooks() -> dict:
        """
        List the organization's webhook subscriptions.

        Returns:
            Dict with a "collection" of subscriptions, or error
        """
        return _run("calendly_list_webhooks", lambda api: api.get_webhooks())

    @mcp.tool()
    def calendly_delete_webhook(webhook_id: str) -> dict:
        """
        Delete a webhook subscription. Succeeds if it is already gone.

        Args:
            webhook_id: Webhook subscription UUID

        Returns:
            Dict with success or error
        """

        def _delete(api: CalendlyApi) -> dict[str, Any]:
            api.delete_webhook(webhook_id)
            return {"success": True, "webhook_id": webhook_id}

        return _run("calendly_delete_webhook", _delete)

    return [
        "calendly_echo",
        "calendly_create_webhook",
        "calendly_get_webhook",
        "calendly_list_webhooks",
        "calendly_delete_webhook",
    ]
