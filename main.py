# =============================================================================
# main.py  -  Entry Point for the Help Center Knowledge MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run help-center-mcp
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads a .env file (if present) into the environment
#   2. Builds an immutable Config from environment variables
#   3. Builds the FastMCP server for the selected backend (tools/mcp_server.py)
#   4. Serves MCP over stdio until the host closes the transport
#
# EXIT CODES:
#   1  missing/invalid configuration or any other startup failure
#   0  transport closed normally
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Must run before Config.from_env() reads the environment.
load_dotenv()

from core.config import Config
from core.errors import ConfigError
from tools.mcp_server import build_server

logger = logging.getLogger("help_center_mcp")


def main() -> None:
    try:
        config = Config.from_env()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    try:
        server = build_server(config)
        logger.info(
            f"{config.site_name} MCP Server running on stdio (API: {config.api_base})"
        )
        server.run()
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
