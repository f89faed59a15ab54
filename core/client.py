# =============================================================================
# core/client.py  -  Backend HTTP client
# =============================================================================
#
# One capability: GET <api_base><endpoint> and hand back the parsed JSON.
#
#   - non-2xx            -> BackendHTTPError (status + reason phrase)
#   - network failure    -> the httpx.TransportError propagates unchanged
#   - unparseable body   -> ResponseShapeError
#
# No retries, no caching.  Each call opens its own AsyncClient so nothing is
# shared between tool invocations.  Tests inject an httpx.MockTransport.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import Config
from core.errors import BackendHTTPError, ResponseShapeError

logger = logging.getLogger(__name__)


class KnowledgeBaseClient:
    """Async JSON-over-HTTPS client for the configured backend."""

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = config.api_base.rstrip("/")
        self.timeout = config.timeout
        self.transport = transport
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        # Precomputed once; only the Zendesk variant has credentials.
        if config.auth_header:
            self.headers["Authorization"] = config.auth_header

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    async def get_json(self, endpoint: str) -> Any:
        """GET ``endpoint`` relative to the base URL and return its JSON.

        Args:
            endpoint: Path (and query string) starting with "/".

        Raises:
            BackendHTTPError: The backend answered with a non-2xx status.
            ResponseShapeError: The body is not valid JSON.
            httpx.TransportError: The request never got a response.
        """
        url = self.url_for(endpoint)
        logger.debug(f"GET {url}")

        async with httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            response = await client.get(url)

        if not response.is_success:
            logger.warning(f"GET {url} -> {response.status_code} {response.reason_phrase}")
            raise BackendHTTPError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseShapeError(f"Invalid JSON from {url}: {e}") from e
