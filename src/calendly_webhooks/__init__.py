"""
Calendly Webhooks - minimal Calendly API client with FastMCP tools.

Usage:
    from calendly_webhooks import CalendlyApi, EVENT_CREATED

    with CalendlyApi() as api:
        api.echo()
        api.create_webhook("https://example.com/hook", [EVENT_CREATED])
"""

from .client import (
    ALLOWED_EVENTS,
    API_URL,
    EVENT_CANCELED,
    EVENT_CREATED,
    CalendlyApi,
)
from .credentials import (
    CALENDLY_CREDENTIALS,
    CredentialError,
    CredentialManager,
    CredentialSpec,
)
from .errors import CalendlyApiError, ErrorKind

__version__ = "0.1.0"

__all__ = [
    "ALLOWED_EVENTS",
    "API_URL",
    "CALENDLY_CREDENTIALS",
    "CalendlyApi",
    "CalendlyApiError",
    "CredentialError",
    "CredentialManager",
    "CredentialSpec",
    "EVENT_CANCELED",
    "EVENT_CREATED",
    "ErrorKind",
]
