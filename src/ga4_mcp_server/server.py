"""
GA4 MCP Server

A Model Context Protocol server for the Google Analytics Data API.
Provides read-only reporting tools: custom reports, realtime data and a
handful of canned reports.
"""

import logging

# Import coordinator with singleton MCP instance
from .coordinator import mcp

from . import utils
from .config import Settings

# The following imports are necessary to register the tools with the `mcp`
# object, even though they are not directly used in this file.
from . import reporting  # noqa: F401
from . import realtime  # noqa: F401

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    """Log to stderr; stdout carries the protocol."""
    level = logging.WARNING if settings.quiet else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("google.auth").setLevel(logging.ERROR)


def main():
    """Main entry point for the MCP server."""
    settings = Settings.from_env()
    configure_logging(settings)

    try:
        # Initialize Google Analytics client
        utils.initialize_client(settings)

        # Start the MCP server
        logger.info("Starting GA4 MCP Server...")
        mcp.run(show_banner=not settings.quiet)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise


if __name__ == "__main__":
    main()
