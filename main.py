# =============================================================================
# main.py  —  Entry Point for the UK Regulatory Intelligence MCP Server
# =============================================================================
#
# HOW TO RUN:
#   SECTORS=social-care,education python main.py
#
# WHAT HAPPENS:
#   1. Loads environment variables from a .env file, if there is one
#   2. Reads SECTORS into an immutable ServerConfig (core/config.py)
#   3. Builds the FastMCP server around a Dispatcher + SearchGateway
#   4. Serves MCP over stdio until the client disconnects
#
# An MCP client (e.g. Claude Desktop) launches this as a subprocess:
#
#   "uk-regulatory-intelligence": {
#     "command": "python",
#     "args": ["/path/to/main.py"],
#     "env": {"SECTORS": "social-care,education"}
#   }
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import load_config
from tools.mcp_server import build_default_server, configure_logging


def main() -> None:
    """Start the server on stdio.  Exits with status 1 on a startup failure."""
    # Must happen before load_config(), which reads SECTORS from os.environ.
    load_dotenv()
    configure_logging()

    try:
        config = load_config()
        server = build_default_server(config)
        logging.info("UK Regulatory Intelligence MCP Server running")
        logging.info(f"Configured sectors: {config.sectors_env}")
        server.run()
    except Exception:
        logging.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
