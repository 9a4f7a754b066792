"""
Error types raised by the Calendly client.

Every failure surfaces as a CalendlyApiError tagged with an ErrorKind, so
callers can branch on the origin of the failure without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Where a CalendlyApiError originated."""

    VALIDATION = "validation"
    """Rejected locally before any request was sent."""

    HTTP = "http"
    """Calendly answered with a 4xx response."""

    TRANSPORT = "transport"
    """Network failure or a 5xx response."""

    DECODE = "decode"
    """Response claimed to be JSON but could not be parsed."""


class CalendlyApiError(Exception):
    """
    Raised for any failed Calendly operation.

    Attributes:
        message: Human-readable message. For 4xx responses this is the raw
            response body.
        code: HTTP status, 500 for decode failures, None when unknown.
        kind: Origin of the failure.
        detail: The ``message`` field of a JSON error body, when present.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a tool result dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "kind": self.kind.value,
            "code": self.code,
        }
        if self.detail is not None:
            result["detail"] = self.detail
        return result
