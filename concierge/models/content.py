"""
Content synchronization models.

Documents mirrored from the CMS into the retrieval store and the report
returned by a sync pass.

Dependencies: pydantic
System role: ETL data contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SyncMetadata(BaseModel):
    """Metadata stored alongside each mirrored document."""

    id: str
    type: str
    title: str = ""
    slug: str = ""
    updated_at: str = ""


class SyncDocument(BaseModel):
    """One formatted CMS document, keyed by (source_id, source_type)."""

    source_id: str
    source_type: str
    formatted_text: str
    metadata: SyncMetadata
    source: str = "sanity"

    @property
    def record_id(self) -> str:
        """Store-level identifier used for upserts."""
        return f"{self.source_type}:{self.source_id}"


class TypeSyncResult(BaseModel):
    """Outcome of syncing one content type."""

    content_type: str
    fetched: int = 0
    added: int = 0
    skipped: int = 0
    error: str | None = None


class SyncReport(BaseModel):
    """Aggregate outcome of a sync pass."""

    started_at: datetime
    finished_at: datetime | None = None
    results: list[TypeSyncResult] = Field(default_factory=list)

    @property
    def total_added(self) -> int:
        return sum(result.added for result in self.results)

    @property
    def failed_types(self) -> list[str]:
        return [result.content_type for result in self.results if result.error]


class RetrievedDocument(BaseModel):
    """Single scored result from the retrieval store."""

    record_id: str
    content: str
    metadata: dict = Field(default_factory=dict)
    score: float
