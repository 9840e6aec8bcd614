"""
Entry point for the workday calendar MCP server.
"""

import logging
import os

from . import mcp

logger = logging.getLogger(__name__)


def main():
    """Starts the server for local development."""
    host = os.getenv("WORKDAY_CALENDAR_HOST", "0.0.0.0")
    raw_port = os.getenv("WORKDAY_CALENDAR_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        logger.error("WORKDAY_CALENDAR_PORT must be an integer, got %r", raw_port)
        raise SystemExit(1)
    logger.info("Server running at http://%s:%d", host, port)

    # Start the FastMCP server with HTTP transport
    mcp.run(transport="streamable-http", host=host, port=port)


if __name__ == "__main__":
    main()
