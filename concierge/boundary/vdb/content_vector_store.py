"""
Content vector store.

Wraps a LangChain VectorStore (InMemoryVectorStore or FAISS) with the
operations the content synchronizer and chat retrieval need. Upserts are
keyed by "{source_type}:{source_id}" so re-syncing a document replaces its
previous vector instead of appending a duplicate.

Dependencies: langchain_core, concierge.models.content
System role: Vector store adapter for RAG retrieval
"""

import logging
from collections.abc import Callable

from langchain_core.documents import Document
from langchain_core.vectorstores import VectorStore

from concierge.core.exceptions import VectorStoreError
from concierge.models.content import RetrievedDocument, SyncDocument

logger = logging.getLogger(__name__)


class ContentVectorStore:
    """Retrieval store holding one vector per CMS document."""

    def __init__(
        self,
        store: VectorStore,
        persist: Callable[[VectorStore], None] | None = None,
    ) -> None:
        """
        Initialize content vector store.

        Args:
            store: LangChain vector store implementation
            persist: Optional callback saving the store after writes
        """
        self._store = store
        self._persist = persist

    async def initialize(self) -> None:
        """Prepare the store for use."""
        logger.info(
            f"{__name__}:initialize - Using {type(self._store).__name__} "
            f"({await self.count()} documents)"
        )

    async def add_documents(self, documents: list[SyncDocument]) -> int:
        """
        Upsert documents by record id.

        Args:
            documents: Formatted documents to store

        Returns:
            int: Number of documents written

        Raises:
            VectorStoreError: If the underlying store rejects the write
        """
        if not documents:
            return 0

        # Last write wins for duplicate ids within one batch
        by_id = {doc.record_id: doc for doc in documents}
        ids = list(by_id)

        try:
            existing = await self._store.aget_by_ids(ids)
            stale_ids = [doc.id for doc in existing if doc.id]
            if stale_ids:
                await self._store.adelete(stale_ids)

            await self._store.aadd_documents(
                [
                    Document(
                        id=record_id,
                        page_content=doc.formatted_text,
                        metadata={
                            **doc.metadata.model_dump(),
                            "source": doc.source,
                            "record_id": record_id,
                        },
                    )
                    for record_id, doc in by_id.items()
                ],
                ids=ids,
            )
        except Exception as e:
            logger.error(f"{__name__}:add_documents - Upsert failed: {type(e).__name__}: {e}")
            raise VectorStoreError(f"Upsert failed: {e}", operation="upsert") from e

        if self._persist is not None:
            self._persist(self._store)

        logger.info(
            f"{__name__}:add_documents - Upserted {len(ids)} documents "
            f"({len(stale_ids)} replaced)"
        )
        return len(ids)

    async def similarity_search(self, query: str, k: int = 5) -> list[RetrievedDocument]:
        """
        Search for documents similar to query.

        Args:
            query: Search text
            k: Number of results

        Returns:
            list[RetrievedDocument]: Results ordered by decreasing score
        """
        try:
            results = await self._store.asimilarity_search_with_score(query, k=k)
        except Exception as e:
            logger.error(f"{__name__}:similarity_search - Query failed: {type(e).__name__}: {e}")
            raise VectorStoreError(f"Query failed: {e}", operation="query") from e

        return [
            RetrievedDocument(
                record_id=doc.id or doc.metadata.get("record_id", ""),
                content=doc.page_content,
                metadata=dict(doc.metadata),
                score=float(score),
            )
            for doc, score in results
        ]

    async def count(self) -> int:
        """Number of stored documents, when the backend exposes it."""
        if hasattr(self._store, "store"):
            return len(self._store.store)
        if hasattr(self._store, "index_to_docstore_id"):
            return len(self._store.index_to_docstore_id)
        return 0
