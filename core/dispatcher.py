# =============================================================================
# core/dispatcher.py  -  Tool Dispatcher
# =============================================================================
#
# The seam between a tool-calling host and the backend operations.
#
#   list_tools()              -> three static ToolSpec descriptors
#   call_tool(name, args)     -> ToolResult (text or error-flagged text)
#
# call_tool NEVER raises.  Argument validation happens before any network
# call; unknown tools and operation failures come back as error results
# whose text is "Error: <message>".
#
# The dispatcher is stateless; it only holds the backend it routes to.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

import httpx

from core.client import KnowledgeBaseClient
from core.config import Config
from core.generic_api import GenericKnowledgeBase
from core.zendesk import ZendeskHelpCenter

logger = logging.getLogger(__name__)

FETCH_TOOL = "fetch_article"
SEARCH_TOOL = "search_content"
QUERY_PARAM = "query"


class Backend(Protocol):
    """What the dispatcher needs from a backend variant."""

    list_tool: str
    list_alias: str
    id_param: str
    id_description: str

    @property
    def site_name(self) -> str: ...

    async def list_content(self) -> str: ...

    async def fetch_article(self, identifier: str) -> str: ...

    async def search_content(self, query: str) -> str: ...


@dataclass(frozen=True)
class ToolSpec:
    """A tool descriptor as presented to the host: name, description, schema."""

    name: str
    description: str
    input_schema: dict = field(default_factory=lambda: {"type": "object", "properties": {}})

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False


def _string_schema(param: str, description: str) -> dict:
    return {
        "type": "object",
        "properties": {param: {"type": "string", "description": description}},
        "required": [param],
    }


class ToolDispatcher:
    """Routes tool calls to a backend and converts every outcome to a ToolResult."""

    def __init__(self, backend: Backend):
        self.backend = backend
        site = backend.site_name

        self._specs = [
            ToolSpec(
                name=backend.list_tool,
                description=(
                    f"List all available content in {site}. Use this to discover "
                    "what help articles are available."
                ),
            ),
            ToolSpec(
                name=FETCH_TOOL,
                description=(
                    f"Fetch and return the full content of a specific article from "
                    f"{site}. Use this to get the complete, up-to-date content of "
                    "an article."
                ),
                input_schema=_string_schema(backend.id_param, backend.id_description),
            ),
            ToolSpec(
                name=SEARCH_TOOL,
                description=(
                    f"Search for articles in {site}. Returns matching articles "
                    "with previews and identifiers."
                ),
                input_schema=_string_schema(
                    QUERY_PARAM, "The search query or topic to look for"
                ),
            ),
        ]

    def list_tools(self) -> list[ToolSpec]:
        return list(self._specs)

    def spec(self, name: str) -> ToolSpec:
        for spec in self._specs:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def missing_argument(self, name: str, arguments: Optional[dict]) -> Optional[ToolResult]:
        """Error result for the first required string argument that is absent.

        Returns None when the arguments are complete or the tool is unknown.
        """
        args = arguments if isinstance(arguments, dict) else {}
        try:
            required = self.spec(name).required
        except KeyError:
            return None
        for param in required:
            if not isinstance(args.get(param), str):
                return _missing(param)
        return None

    async def call_tool(self, name: str, arguments: Optional[dict] = None) -> ToolResult:
        """Run tool ``name`` with ``arguments`` and wrap the outcome."""
        args = arguments if isinstance(arguments, dict) else {}
        missing = self.missing_argument(name, args)
        if missing is not None:
            return missing

        try:
            if name in (self.backend.list_tool, self.backend.list_alias):
                return ToolResult(await self.backend.list_content())

            if name == FETCH_TOOL:
                return ToolResult(await self.backend.fetch_article(args[self.backend.id_param]))

            if name == SEARCH_TOOL:
                return ToolResult(await self.backend.search_content(args[QUERY_PARAM]))

            raise ValueError(f"Unknown tool: {name}")
        except Exception as e:
            logger.error(f"{name} failed: {e}")
            return ToolResult(f"Error: {e}", is_error=True)


def _missing(param: str) -> ToolResult:
    return ToolResult(f"Error: Missing required parameter: {param}", is_error=True)


def create_dispatcher(
    config: Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolDispatcher:
    """Wire client, backend variant and dispatcher for ``config``."""
    client = KnowledgeBaseClient(config, transport=transport)
    backend_cls = ZendeskHelpCenter if config.is_zendesk else GenericKnowledgeBase
    return ToolDispatcher(backend_cls(config, client))
