"""
Unit tests for calendly_webhooks logging configuration.
"""

import logging

from calendly_webhooks.logging import configure_logging, get_logger


def test_configure_logging_is_idempotent():
    """Repeated calls never add a second handler."""
    logger = logging.getLogger("calendly_webhooks")

    configure_logging()
    configure_logging(stdio=False)
    configure_logging(stdio=True)

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_stdio_logs_to_stderr(capsys):
    """Over STDIO, stdout stays clean for JSON-RPC."""
    configure_logging(stdio=True)

    get_logger("calendly_webhooks.test_component").info("webhook created")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "webhook created" in captured.err
    assert "INFO" in captured.err
    assert "test_component" in captured.err


def test_http_logs_to_stdout(capsys):
    configure_logging(stdio=False)

    get_logger("calendly_webhooks.mcp_server").info("Starting HTTP server")

    captured = capsys.readouterr()
    assert "Starting HTTP server" in captured.out
    assert captured.err == ""


def test_switching_transport_moves_stream(capsys):
    """A later stdio flag retargets the existing handler."""
    configure_logging()
    configure_logging(stdio=False)

    get_logger().warning("moved")

    assert "moved" in capsys.readouterr().out


def test_invalid_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("CALENDLY_WEBHOOKS_LOG_LEVEL", "chatty")

    logger = configure_logging()

    assert logger.level == logging.INFO


def test_explicit_level_and_format(capsys):
    configure_logging(level="debug", fmt="[calendly] %(message)s")

    get_logger("calendly_webhooks.client").debug("request sent")

    assert "[calendly] request sent" in capsys.readouterr().err


def test_get_logger_default_name():
    assert get_logger().name == "calendly_webhooks"
    assert get_logger("calendly_webhooks.tools").name == "calendly_webhooks.tools"
