"""
Logging setup for the Calendly webhook tools and MCP server.

Over STDIO, stdout carries the JSON-RPC stream, so log records must go to
stderr. Over HTTP, records go to stdout where container runtimes collect them.
"""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "calendly_webhooks"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_ATTR = "_calendly_webhooks_handler"


def _find_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return handler
    return None


def configure_logging(
    level: str | None = None,
    fmt: str | None = None,
    stdio: bool | None = None,
) -> logging.Logger:
    """
    Attach the package handler to the calendly_webhooks logger.

    Args:
        level: Log level name; defaults to CALENDLY_WEBHOOKS_LOG_LEVEL or INFO.
        fmt: Record format; defaults to CALENDLY_WEBHOOKS_LOG_FORMAT.
        stdio: True to log to stderr (STDIO transport), False for stdout.
            None keeps the current stream, stderr on first setup.

    Calling this again never adds a second handler. Passing ``stdio`` to an
    already configured logger only switches its stream.
    """
    base_logger = logging.getLogger(PACKAGE_LOGGER)

    handler = _find_handler(base_logger)
    if handler is not None:
        if stdio is not None:
            handler.setStream(sys.stderr if stdio else sys.stdout)
        return base_logger

    stream = sys.stdout if stdio is False else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        logging.Formatter(fmt or os.getenv("CALENDLY_WEBHOOKS_LOG_FORMAT", DEFAULT_FORMAT))
    )
    setattr(handler, _HANDLER_ATTR, True)

    resolved_level = (level or os.getenv("CALENDLY_WEBHOOKS_LOG_LEVEL", "INFO")).upper()
    try:
        base_logger.setLevel(resolved_level)
    except ValueError:
        base_logger.setLevel(logging.INFO)

    base_logger.addHandler(handler)
    base_logger.propagate = False
    return base_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under calendly_webhooks, configuring the package once."""
    configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
