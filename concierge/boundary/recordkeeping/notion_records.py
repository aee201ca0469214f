"""
Notion recordkeeping client.

Maps transcript records onto a Notion database with a fixed property set
(date, time title, query, response, processing time, client, location,
contact email, status) and provides the lookups the exporter uses for
deduplication.

Dependencies: notion_client, concierge.configs
System role: External recordkeeping system adapter
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from concierge.configs.recordkeeping import NotionSettings
from concierge.core.exceptions import ConfigurationError, RecordkeepingError

logger = logging.getLogger(__name__)

# Notion rejects rich_text segments longer than this
MAX_TEXT_LENGTH = 2000

# HTTPResponseError covers APIResponseError and non-JSON error bodies
NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


@dataclass
class TranscriptRecord:
    """Property values written for one exported transcript."""

    date: str
    time: str
    query: str
    response: str
    processing_time_ms: float = 0.0
    client_identity: str | None = None
    location: str | None = None
    contact_info: str | None = None


def _rich_text(value: str | None) -> dict[str, Any]:
    if not value:
        return {"rich_text": []}
    return {"rich_text": [{"text": {"content": value[:MAX_TEXT_LENGTH]}}]}


class NotionRecordClient:
    """Create, find and patch transcript pages in a Notion database."""

    def __init__(self, settings: NotionSettings, client: AsyncClient | None = None) -> None:
        """
        Initialize Notion record client.

        Args:
            settings: Notion settings (token, database and property names)
            client: Optional pre-built notion_client.AsyncClient
        """
        if not settings.database_id:
            raise ConfigurationError("NOTION_DATABASE_ID is not set", "NOTION_DATABASE_ID")
        if client is None:
            if not settings.api_token:
                raise ConfigurationError("NOTION_API_TOKEN is not set", "NOTION_API_TOKEN")
            client = AsyncClient(auth=settings.api_token)
        self._client = client
        self._settings = settings
        self._database_id = settings.database_id

    def build_properties(self, record: TranscriptRecord) -> dict[str, Any]:
        """Translate a record into Notion page properties."""
        s = self._settings
        return {
            s.date_property: {"date": {"start": record.date}},
            s.time_property: {"title": [{"text": {"content": record.time}}]},
            s.query_property: _rich_text(record.query),
            s.response_property: _rich_text(record.response),
            s.processing_time_property: {"number": record.processing_time_ms or 0},
            s.client_property: _rich_text(record.client_identity),
            s.location_property: _rich_text(record.location),
            s.contact_property: {"email": record.contact_info or None},
            s.status_property: {"select": {"name": s.status_complete}},
        }

    async def _query(self, filters: list[dict[str, Any]]) -> list[dict[str, Any]]:
        try:
            response = await self._client.databases.query(
                database_id=self._database_id,
                filter={"and": filters},
            )
        except NOTION_ERRORS as e:
            raise RecordkeepingError(f"Notion query failed: {e}") from e
        return response.get("results", [])

    async def find_turn_records(self, date: str, time: str, query: str) -> list[dict[str, Any]]:
        """Find pages already holding the turn asked at date+time with this query."""
        s = self._settings
        return await self._query([
            {"property": s.date_property, "date": {"equals": date}},
            {"property": s.time_property, "title": {"equals": time}},
            {"property": s.query_property, "rich_text": {"equals": query[:MAX_TEXT_LENGTH]}},
        ])

    async def find_conversation_record(self, contact_info: str, date: str) -> dict[str, Any] | None:
        """Return the conversation page for (contact, date), or None."""
        s = self._settings
        results = await self._query([
            {"property": s.contact_property, "email": {"equals": contact_info}},
            {"property": s.date_property, "date": {"equals": date}},
        ])
        return results[0] if results else None

    async def create_record(self, record: TranscriptRecord) -> str:
        """
        Create a page for record.

        Returns:
            str: The new page ID
        """
        try:
            page = await self._client.pages.create(
                parent={"database_id": self._database_id},
                properties=self.build_properties(record),
            )
        except NOTION_ERRORS as e:
            raise RecordkeepingError(f"Notion create failed: {e}") from e
        return page["id"]

    async def update_record(self, page_id: str, record: TranscriptRecord) -> str:
        """Patch an existing page in place."""
        try:
            await self._client.pages.update(
                page_id=page_id,
                properties=self.build_properties(record),
            )
        except NOTION_ERRORS as e:
            raise RecordkeepingError(f"Notion update failed: {e}") from e
        return page_id
