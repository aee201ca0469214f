"""
Sanity CMS read client.

Runs GROQ queries against the Sanity HTTP query API. Query parameters are
JSON-encoded and passed as `$name` URL parameters, so callers never
interpolate user input into query text.

Dependencies: httpx, concierge.configs, concierge.core.exceptions
System role: CMS read API adapter
"""

import json
import logging
from typing import Any

import httpx

from concierge.configs.cms import SanitySettings
from concierge.core.exceptions import CMSError, ConfigurationError

logger = logging.getLogger(__name__)


class SanityClient:
    """Async read-only client for a Sanity dataset."""

    def __init__(
        self,
        settings: SanitySettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Sanity client.

        Args:
            settings: Sanity project settings
            http_client: Optional pre-built httpx client (tests inject a mock transport)
        """
        if not settings.project_id:
            raise ConfigurationError("SANITY_PROJECT_ID is not configured", "SANITY_PROJECT_ID")

        host = "apicdn.sanity.io" if settings.use_cdn and not settings.token else "api.sanity.io"
        self._base_url = f"https://{settings.project_id}.{host}/v{settings.api_version}"
        self._dataset = settings.dataset

        headers = {"Accept": "application/json"}
        if settings.token:
            headers["Authorization"] = f"Bearer {settings.token}"

        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=settings.timeout_seconds,
        )

    async def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """
        Run a GROQ query.

        Args:
            query: GROQ query text, referencing parameters as $name
            params: Parameter values

        Returns:
            Any: The query `result` payload (list, object or None)

        Raises:
            CMSError: On transport failure or non-2xx status
        """
        request_params = {"query": query}
        for name, value in (params or {}).items():
            request_params[f"${name}"] = json.dumps(value, ensure_ascii=False)

        try:
            response = await self._client.get(
                f"{self._base_url}/data/query/{self._dataset}",
                params=request_params,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{__name__}:fetch - CMS returned {e.response.status_code}: {e.response.text[:500]}"
            )
            raise CMSError(
                "CMS query failed",
                status_code=e.response.status_code,
                details={"body": e.response.text[:500]},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:fetch - CMS transport error: {type(e).__name__}: {e}")
            raise CMSError(f"CMS request failed: {type(e).__name__}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise CMSError("CMS returned a non-JSON body") from e
        return payload.get("result")

    async def fetch_by_id(self, document_id: str) -> dict[str, Any] | None:
        """Fetch a single document by its _id, or None when absent."""
        return await self.fetch("*[_id == $id][0]", {"id": document_id})

    async def close(self) -> None:
        await self._client.aclose()
