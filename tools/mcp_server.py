# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the three knowledge-base tools over MCP.  Each tool is a thin
#   wrapper around core.dispatcher.ToolDispatcher: it logs the call, hands
#   the arguments to the dispatcher and turns the ToolResult into what
#   FastMCP expects.
#
# THE FLOW:
#   1. The host (an assistant app) calls a tool by name over stdio
#   2. DispatcherMiddleware checks required arguments and routes the list
#      alias and unknown names to the dispatcher
#   3. The registered tool below calls dispatcher.call_tool(...)
#   4. Success -> the text is returned as a single text block
#      Failure -> ToolError("Error: ...") -> an error-flagged text block
#
# TOOLS (names depend on KB_BACKEND):
#   generic   list_articles,   fetch_article(article_slug), search_content(query)
#   zendesk   list_categories, fetch_article(article_id),   search_content(query)
#
# RUNNING THIS SERVER:
#   help-center-mcp            (console script, see main.py)
#   python main.py
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent
from pydantic import Field

from core.config import Config
from core.dispatcher import FETCH_TOOL, SEARCH_TOOL, ToolDispatcher, create_dispatcher

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport, so every log line goes to STDERR.
#
# ANSI colors make tool traffic easy to scan in a terminal:
#   CYAN requests, GREEN responses, YELLOW status, RED errors.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

SERVER_NAME = "help-center-knowledge"


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_error(tool_name: str, message: str) -> None:
    logging.error(f"{_RED}  ← {tool_name} failed: {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line and size of a tool response, then return it."""
    first_line = text.splitlines()[0] if text else ""
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


async def _call(dispatcher: ToolDispatcher, tool_name: str, **arguments) -> str:
    _log_request(tool_name, **arguments)
    result = await dispatcher.call_tool(tool_name, arguments)
    if result.is_error:
        _log_error(tool_name, result.text)
        raise ToolError(result.text)
    return _log_response(tool_name, result.text)


# =============================================================================
# Call routing middleware
# =============================================================================
# FastMCP validates arguments and resolves tool names before a tool function
# runs.  This middleware runs first and lets the dispatcher answer:
#   - a registered tool missing a required argument -> the dispatcher error
#   - a name that is not registered (the list alias, unknown tools) ->
#     routed straight to dispatcher.call_tool
# Everything else continues to the registered tool.
# =============================================================================
class DispatcherMiddleware(Middleware):
    def __init__(self, dispatcher: ToolDispatcher):
        self.dispatcher = dispatcher
        self.registered = {spec.name for spec in dispatcher.list_tools()}

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        arguments = context.message.arguments or {}

        if name not in self.registered:
            _log_request(name, **arguments)
            result = await self.dispatcher.call_tool(name, arguments)
            if result.is_error:
                _log_error(name, result.text)
                raise ToolError(result.text)
            _log_response(name, result.text)
            return MCPToolResult(content=[TextContent(type="text", text=result.text)])

        missing = self.dispatcher.missing_argument(name, arguments)
        if missing is not None:
            _log_request(name, **arguments)
            _log_error(name, missing.text)
            raise ToolError(missing.text)

        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
# The server is built from an explicit Config rather than at import time, so
# tests can build one against a mock HTTP transport.
# =============================================================================
def build_server(
    config: Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Create the FastMCP server for ``config`` with its three tools registered."""
    dispatcher = create_dispatcher(config, transport=transport)
    backend = dispatcher.backend
    list_spec = dispatcher.spec(backend.list_tool)
    fetch_spec = dispatcher.spec(FETCH_TOOL)
    search_spec = dispatcher.spec(SEARCH_TOOL)

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            f"Tools for reading help articles from {config.site_name}. "
            f"Use {search_spec.name} to find articles and {fetch_spec.name} "
            "to read one in full."
        ),
    )
    mcp.add_middleware(DispatcherMiddleware(dispatcher))
    _log_status(
        f"{config.backend} backend at {config.api_base}; tools: "
        f"{list_spec.name}, {fetch_spec.name}, {search_spec.name}"
    )

    # -------------------------------------------------------------------------
    # TOOL 1: list_articles / list_categories
    # -------------------------------------------------------------------------
    @mcp.tool(name=list_spec.name, description=list_spec.description)
    async def list_content() -> str:
        return await _call(dispatcher, list_spec.name)

    # -------------------------------------------------------------------------
    # TOOL 2: fetch_article
    # -------------------------------------------------------------------------
    # The argument name is part of the tool contract, so each backend gets
    # its own signature.
    if config.is_zendesk:

        @mcp.tool(name=fetch_spec.name, description=fetch_spec.description)
        async def fetch_article(
            article_id: Annotated[str, Field(description=backend.id_description)],
        ) -> str:
            return await _call(dispatcher, fetch_spec.name, article_id=article_id)

    else:

        @mcp.tool(name=fetch_spec.name, description=fetch_spec.description)
        async def fetch_article(
            article_slug: Annotated[str, Field(description=backend.id_description)],
        ) -> str:
            return await _call(dispatcher, fetch_spec.name, article_slug=article_slug)

    # -------------------------------------------------------------------------
    # TOOL 3: search_content
    # -------------------------------------------------------------------------
    @mcp.tool(name=search_spec.name, description=search_spec.description)
    async def search_content(
        query: Annotated[str, Field(description="The search query or topic to look for")],
    ) -> str:
        return await _call(dispatcher, search_spec.name, query=query)

    return mcp


if __name__ == "__main__":
    from main import main

    main()
