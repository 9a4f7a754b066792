#!/usr/bin/env python3
"""
Calendly Webhooks MCP Server

Exposes the Calendly webhook tools via Model Context Protocol using FastMCP.

Usage:
    # Run with HTTP transport (default)
    python -m calendly_webhooks.mcp_server

    # Run with custom port
    python -m calendly_webhooks.mcp_server --port 8001

    # Run with STDIO transport (for local testing)
    python -m calendly_webhooks.mcp_server --stdio

Environment Variables:
    MCP_PORT            - Server port (default: 4001)
    CALENDLY_API_TOKEN  - Calendly personal access token
    ORGANIZATION_ID     - Organization URI owning the webhook subscriptions
"""

import argparse
import os
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from calendly_webhooks.credentials import CredentialError, CredentialManager
from calendly_webhooks.logging import configure_logging, get_logger
from calendly_webhooks.tools import register_tools

configure_logging(stdio="--stdio" in sys.argv)
logger = get_logger(__name__)

credentials = CredentialManager()

try:
    credentials.validate_startup()
    credentials.validate_for_tools(["calendly_echo"])
    logger.info("Calendly credentials validated")
except CredentialError as e:
    logger.warning(str(e))

mcp = FastMCP("calendly")

tools = register_tools(mcp, credentials=credentials)
logger.info("Registered %d tools: %s", len(tools), tools)


@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> PlainTextResponse:
    """Health check endpoint for container orchestration."""
    return PlainTextResponse("OK")


def main() -> None:
    """Entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="Calendly Webhooks MCP Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("MCP_PORT", "4001")),
        help="HTTP server port (default: 4001)",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="HTTP server host (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Use STDIO transport instead of HTTP",
    )
    args = parser.parse_args()
    configure_logging(stdio=args.stdio)

    if args.stdio:
        mcp.run(transport="stdio")
    else:
        logger.info("Starting HTTP server on %s:%s", args.host, args.port)
        mcp.run(transport="http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
