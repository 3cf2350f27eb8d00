# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the five MCP tools an assistant can call.  Each tool is a thin
#   wrapper around core.dispatch.Dispatcher: it logs the request, hands the
#   arguments to the dispatcher, logs the response, and returns it.
#
# HOW IT WORKS (the flow):
#   1. The assistant calls a tool by name via MCP (e.g. "search_publications")
#   2. FastMCP routes the call to the decorated function below
#   3. The function calls Dispatcher.dispatch(name, arguments)
#   4. A success payload is returned as a dict; an error payload is raised
#      as a ToolError so the client sees an MCP error result whose text is
#      the JSON {"error": "..."}
#
# TOOL NAMING CONVENTIONS:
#   - search_* / get_* / list_*  → read-only lookups, safe to retry
#   - generate_*                 → read-only aggregate of several lookups
#   Nothing here writes anywhere; every call re-queries GOV.UK.
#
# RUNNING THIS SERVER:
#   python main.py            (stdio transport, what MCP clients launch)
#   python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.config import ServerConfig, load_config
from core.dispatch import Dispatcher
from core.gateway import SearchGateway
from core.sectors import parse_selection

SERVER_NAME = "uk-regulatory-intelligence"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout carries the MCP JSON stream, and anything else
# written there corrupts it.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
#     - RED for error results
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error results
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


async def _call(dispatcher: Dispatcher, tool_name: str, **arguments: Any) -> dict:
    """Dispatch a tool call and turn error results into MCP errors."""
    _log_request(tool_name, **arguments)
    result = await dispatcher.dispatch(tool_name, arguments)
    if result.is_error:
        logging.info(f"{_RED}  ✗ {tool_name} error: {result.payload['error']}{_RESET}")
        raise ToolError(json.dumps(result.payload, indent=2))
    return _log_response(tool_name, result.payload)


# =============================================================================
# Server factory
# =============================================================================
# The tools close over a Dispatcher instead of reaching for module globals,
# so tests can build a server around a fake gateway or another registry.
# The docstrings are what the assistant reads to decide WHEN to call a tool.
# =============================================================================
def create_server(dispatcher: Dispatcher) -> FastMCP:
    """Build the FastMCP server exposing the five regulatory tools."""
    mcp = FastMCP(SERVER_NAME)

    # -------------------------------------------------------------------------
    # TOOL 1: search_publications
    # -------------------------------------------------------------------------
    @mcp.tool()
    async def search_publications(query: str, days: int = 30, sector: str | None = None) -> dict:
        """Search for regulatory publications, guidance, and policy documents
        from UK government departments and regulators.  Filtered by your
        configured sectors.

        Args:
            query: Search terms (e.g., "safeguarding", "inspection framework").
            days: How far back to search in days (default: 30).
            sector: Optional specific sector to search (must be configured).

        Returns:
            totalResults, resultsShown, searchPeriod, the exact query sent,
            up to 50 results (newest first), sectorsSearched and a note.
        """
        return await _call(dispatcher, "search_publications", query=query, days=days, sector=sector)

    # -------------------------------------------------------------------------
    # TOOL 2: get_parliamentary_questions
    # -------------------------------------------------------------------------
    @mcp.tool()
    async def get_parliamentary_questions(
        days: int = 90,
        searchTerm: str = "care",  # noqa: N803 - published argument name
        sector: str | None = None,
    ) -> dict:
        """Find parliamentary questions and ministerial answers relevant to
        your sectors.  Uses the first configured sector unless one is given.

        Args:
            days: How far back to search in days (default: 90).
            searchTerm: Term to search for (default: "care").
            sector: Optional specific sector to filter (must be configured).

        Returns:
            totalFound, resultsShown, searchPeriod, searchTerm, sector and
            at most 20 results.
        """
        return await _call(
            dispatcher, "get_parliamentary_questions", days=days, searchTerm=searchTerm, sector=sector
        )

    # -------------------------------------------------------------------------
    # TOOL 3: get_regulatory_calendar
    # -------------------------------------------------------------------------
    @mcp.tool()
    async def get_regulatory_calendar(months: int = 6, sector: str | None = None) -> dict:
        """View upcoming regulatory changes, consultations, and deadlines.

        Searches publications from the last 90 days that mention
        consultations, upcoming changes or deadlines.  `months` is echoed
        back as lookingAhead; it does not change the search window.

        Args:
            months: How many months ahead to look (default: 6).
            sector: Optional specific sector to check (must be configured).
        """
        return await _call(dispatcher, "get_regulatory_calendar", months=months, sector=sector)

    # -------------------------------------------------------------------------
    # TOOL 4: generate_monthly_digest
    # -------------------------------------------------------------------------
    @mcp.tool()
    async def generate_monthly_digest() -> dict:
        """Generate a comprehensive monthly summary across all configured
        sectors: top 10 publications, top 10 parliamentary items and the top
        5 upcoming changes."""
        return await _call(dispatcher, "generate_monthly_digest")

    # -------------------------------------------------------------------------
    # TOOL 5: list_configured_sectors
    # -------------------------------------------------------------------------
    @mcp.tool()
    async def list_configured_sectors() -> dict:
        """Show which sectors are currently configured, every sector that
        could be configured, and how to change the selection."""
        return await _call(dispatcher, "list_configured_sectors")

    return mcp


def build_default_server(config: ServerConfig | None = None) -> FastMCP:
    """Server wired to the real GOV.UK gateway and the process config."""
    config = config or load_config()
    ignored = [s for s in parse_selection(config.sectors_env) if s not in config.registry]
    if ignored:
        _log_status(f"Ignoring unknown sectors: {', '.join(ignored)}")
    return create_server(Dispatcher(config, SearchGateway()))


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    configure_logging()
    build_default_server().run()
