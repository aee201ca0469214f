"""
Content synchronizer.

Mirrors configured CMS document types into the retrieval store. Each type
is fetched, filtered, formatted and upserted independently: a failure in
one type is logged and recorded in the report without aborting the others.
During a full sync the types run as bounded concurrent tasks.

Dependencies: asyncio, concierge.boundary.cms, concierge.boundary.vdb
System role: CMS to vector store ETL pipeline
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from concierge.boundary.cms.sanity_client import SanityClient
from concierge.boundary.vdb.content_vector_store import ContentVectorStore
from concierge.core.content_sync.content_types import DEFAULT_CONTENT_TYPES, ContentTypeQuery
from concierge.core.content_sync.formatters import (
    format_document,
    has_enough_content,
    is_valid_content,
)
from concierge.core.exceptions import ValidationError
from concierge.models.content import SyncDocument, SyncReport, TypeSyncResult

logger = logging.getLogger(__name__)


def build_sync_documents(items: Iterable[dict], content_type: str) -> tuple[list[SyncDocument], int]:
    """
    Filter and format raw CMS documents of one type.

    Args:
        items: Raw CMS documents
        content_type: Content type name

    Returns:
        tuple[list[SyncDocument], int]: Formatted documents and the number skipped
    """
    documents = []
    skipped = 0
    for item in items:
        if not is_valid_content(item, content_type):
            skipped += 1
            continue
        content, metadata = format_document(item, content_type)
        if not has_enough_content(content):
            skipped += 1
            continue
        documents.append(
            SyncDocument(
                source_id=metadata.id,
                source_type=content_type,
                formatted_text=content,
                metadata=metadata,
            )
        )
    return documents, skipped


class ContentSynchronizer:
    """ETL pipeline from CMS documents to the content vector store."""

    def __init__(
        self,
        cms: SanityClient,
        vector_store: ContentVectorStore,
        content_types: Iterable[ContentTypeQuery] = DEFAULT_CONTENT_TYPES,
        max_concurrency: int = 4,
    ) -> None:
        """
        Initialize synchronizer.

        Args:
            cms: CMS read client
            vector_store: Retrieval store receiving upserts
            content_types: (type, query) pairs to mirror
            max_concurrency: Upper bound on types processed at once
        """
        self.cms = cms
        self.vector_store = vector_store
        self.content_types = list(content_types)
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def initialize(self) -> None:
        await self.vector_store.initialize()

    async def _sync_one(self, content_type: ContentTypeQuery) -> TypeSyncResult:
        result = TypeSyncResult(content_type=content_type.type)
        async with self._semaphore:
            try:
                logger.info(f"{__name__}:_sync_one - Syncing {content_type.type}")
                items = await self.cms.fetch(content_type.query)
                if not items:
                    logger.info(f"{__name__}:_sync_one - {content_type.type}: no data")
                    return result
                if isinstance(items, dict):
                    items = [items]

                result.fetched = len(items)
                documents, result.skipped = build_sync_documents(items, content_type.type)

                if documents:
                    result.added = await self.vector_store.add_documents(documents)
                    logger.info(
                        f"{__name__}:_sync_one - {content_type.type}: {result.added} added "
                        f"({result.skipped} skipped)"
                    )
                else:
                    logger.warning(
                        f"{__name__}:_sync_one - {content_type.type}: no valid documents "
                        f"(all {result.fetched} skipped)"
                    )
            except Exception as e:
                result.error = f"{type(e).__name__}: {e}"
                logger.error(
                    f"{__name__}:_sync_one - {content_type.type} sync failed: {result.error}",
                    exc_info=True,
                )
        return result

    async def sync_all(self) -> SyncReport:
        """
        Sync every configured content type.

        Returns:
            SyncReport: Per-type counters, in configuration order
        """
        report = SyncReport(started_at=datetime.now(timezone.utc))
        logger.info(f"{__name__}:sync_all - START ({len(self.content_types)} types)")

        report.results = list(
            await asyncio.gather(*(self._sync_one(ct) for ct in self.content_types))
        )
        report.finished_at = datetime.now(timezone.utc)

        logger.info(
            f"{__name__}:sync_all - END added={report.total_added} "
            f"failed_types={report.failed_types}"
        )
        return report

    async def sync_type(self, type_name: str) -> TypeSyncResult:
        """
        Sync a single configured content type.

        Raises:
            ValidationError: If type_name is not configured
        """
        for content_type in self.content_types:
            if content_type.type == type_name:
                return await self._sync_one(content_type)
        raise ValidationError(f"Unknown content type: {type_name}", field="type")
