"""
Knowledge service for the public content endpoint.

Serves CMS content (blog posts, courses, instructors, events) as JSON for
external AI agents. Search terms are passed as query parameters, never
interpolated into the query text.

Dependencies: asyncio, concierge.boundary.cms
System role: Public knowledge read orchestration
"""

import asyncio
import logging
import math
from typing import Any

from concierge.boundary.cms.sanity_client import SanityClient

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

BLOG_QUERY = """
*[_type == "blogPost" && !(_id in path("drafts.*")) {filter}]
| order(publishedAt desc) [0...$limit] {{
  _id, _type, title, "slug": slug.current, excerpt, publishedAt, _updatedAt,
  "url": "/blog/" + slug.current, tags, category,
  "author": author->name, "imageUrl": mainImage.asset->url
}}
"""

COURSE_QUERY = """
*[_type == "course" {filter}] [0...$limit] {{
  _id, _type, title, subtitle, "slug": slug.current, description, _updatedAt,
  "url": "/school/" + slug.current, features, "imageUrl": image.asset->url
}}
"""

INSTRUCTOR_QUERY = """
*[_type == "instructor" {filter}] [0...$limit] {{
  _id, _type, name, "slug": slug.current, bio, region, specialties, _updatedAt,
  "url": "/instructor/" + lower(region) + "/" + slug.current,
  "imageUrl": image.asset->url
}}
"""

EVENT_QUERY = """
*[_type == "event" && useForAI == true {filter}]
| order(startDate asc) [0...$limit] {{
  _id, _type, title, "slug": slug.current, description, startDate, endDate,
  location, fee, capacity, currentParticipants, status, category, tags,
  registrationUrl, _updatedAt, "url": "/event/" + slug.current
}}
"""

SEARCH_FILTERS = {
    "blog": '&& (title match $pattern || excerpt match $pattern || pt::text(content) match $pattern)',
    "course": "&& (title match $pattern || description match $pattern || subtitle match $pattern)",
    "instructor": (
        "&& (name match $pattern || bio match $pattern || region match $pattern "
        "|| specialties[] match $pattern)"
    ),
    "event": "&& (title match $pattern || description match $pattern || location match $pattern)",
}

QUERIES = {
    "blog": BLOG_QUERY,
    "course": COURSE_QUERY,
    "instructor": INSTRUCTOR_QUERY,
    "event": EVENT_QUERY,
}

KNOWLEDGE_TYPES = tuple(QUERIES)


def parse_limit(raw: str | int | None) -> int:
    """Clamp a limit parameter to [1, MAX_LIMIT]; non-numeric values give the default."""
    try:
        value = int(raw) if raw is not None else DEFAULT_LIMIT
    except (TypeError, ValueError):
        value = DEFAULT_LIMIT
    return min(max(value, 1), MAX_LIMIT)


def build_query(content_type: str, search: str | None) -> tuple[str, dict[str, Any]]:
    """
    Build the query text and parameters for one content type.

    Returns:
        tuple[str, dict]: Query text and its parameters (limit excluded)
    """
    params: dict[str, Any] = {}
    search_filter = ""
    if search:
        search_filter = SEARCH_FILTERS[content_type]
        params["pattern"] = f"*{search}*"
    return QUERIES[content_type].format(filter=search_filter), params


class KnowledgeService:
    """Reads public content from the CMS by type."""

    def __init__(self, cms: SanityClient) -> None:
        self.cms = cms

    async def _fetch_type(self, content_type: str, search: str | None, limit: int) -> list[dict]:
        query, params = build_query(content_type, search)
        params["limit"] = limit
        result = await self.cms.fetch(query, params)
        return list(result or [])

    async def search(
        self,
        content_type: str = "all",
        search: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> tuple[str, list[dict]]:
        """
        Fetch content of one type, or of every type for "all".

        Unknown types are treated as "all". For "all", each type contributes
        up to ceil(limit / 4) items and the search term is ignored.

        Args:
            content_type: blog | course | instructor | event | all
            search: Optional substring to match
            limit: Maximum items per type

        Returns:
            tuple[str, list[dict]]: Effective type and the items

        Raises:
            CMSError: If any CMS query fails
        """
        if content_type in KNOWLEDGE_TYPES:
            data = await self._fetch_type(content_type, search, limit)
            return content_type, data

        per_type = math.ceil(limit / len(KNOWLEDGE_TYPES))
        batches = await asyncio.gather(
            *(self._fetch_type(name, None, per_type) for name in KNOWLEDGE_TYPES)
        )
        data = [item for batch in batches for item in batch]
        logger.info(f"{__name__}:search - all: {len(data)} items ({per_type} per type)")
        return "all", data
