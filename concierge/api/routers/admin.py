"""
Admin API endpoints.

Routes:
- POST /admin/sync - Mirror CMS content into the retrieval store
- GET /admin/export-logs - Export one day's chat logs to Notion

Both routes require the ADMIN_SYNC_TOKEN bearer token.

Dependencies: concierge.core.content_sync, concierge.core.export
System role: Operator HTTP API for sync and export jobs
"""

import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from concierge.api.deps import (
    get_content_synchronizer,
    get_transcript_exporter,
    require_admin,
)
from concierge.core.content_sync import ContentSynchronizer
from concierge.core.exceptions import ValidationError
from concierge.core.export import TranscriptExporter
from concierge.models.content import SyncReport, TypeSyncResult
from concierge.models.export import ExportLogsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def yesterday_utc() -> str:
    return (datetime.now(timezone.utc) - timedelta(days=1)).strftime("%Y-%m-%d")


@router.post("/sync", response_model=SyncReport)
async def sync_content(
    type: str | None = Query(default=None, description="Sync only this content type"),
    synchronizer: ContentSynchronizer = Depends(get_content_synchronizer),
) -> SyncReport:
    """
    Sync CMS content into the retrieval store.

    A failure in one content type is reported in its result; the other
    types still sync.

    Args:
        type: Optional single content type
        synchronizer: Injected ContentSynchronizer

    Returns:
        SyncReport: Per-type fetched/added/skipped/error counters

    Raises:
        HTTPException(400): Unknown content type
    """
    await synchronizer.initialize()
    if type is None:
        return await synchronizer.sync_all()

    started = datetime.now(timezone.utc)
    try:
        result: TypeSyncResult = await synchronizer.sync_type(type)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return SyncReport(started_at=started, finished_at=datetime.now(timezone.utc), results=[result])


@router.get("/export-logs", response_model=ExportLogsResponse)
async def export_logs(
    date: str | None = Query(default=None, description="Day to export (YYYY-MM-DD), default yesterday UTC"),
    exporter: TranscriptExporter = Depends(get_transcript_exporter),
) -> ExportLogsResponse:
    """
    Export one day's per-turn chat logs.

    Re-running for the same day skips logs already exported.

    Raises:
        HTTPException(400): Malformed date
    """
    target = date or yesterday_utc()
    try:
        canonical = datetime.strptime(target, "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        canonical = None
    # Log indexes are keyed by the zero-padded form
    if canonical != target:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD")

    logger.info(f"{__name__}:export_logs - Exporting logs for {target}")
    results = await exporter.export_day(target)
    return ExportLogsResponse(
        date=target,
        results=results,
        message=f"Exported {results.success} logs to Notion",
    )
