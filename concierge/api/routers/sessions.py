"""
Session API endpoints.

Routes:
- POST /sessions - Start a new session
- GET /sessions/stats - Active session count
- GET /sessions/{id} - Session status
- DELETE /sessions/{id} - Delete session
- POST /sessions/{id}/contact - Attach visitor contact info

Dependencies: concierge.core.session, concierge.core.export, concierge.models
System role: Session management HTTP API
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from concierge.api.deps import (
    get_chat_log_ledger,
    get_optional_transcript_exporter,
    get_session_store,
)
from concierge.api.routers.router_utils import get_client_identity
from concierge.core.export import ChatLogLedger, TranscriptExporter
from concierge.core.session import SessionStore
from concierge.models.session import (
    ContactRequest,
    ContactResponse,
    SessionStatsResponse,
    SessionStatusResponse,
    StartSessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


async def export_conversation_task(exporter: TranscriptExporter, session_id: str) -> None:
    """Export a session's conversation after contact info arrives."""
    try:
        await exporter.export_conversation(session_id)
    except Exception as e:
        logger.error(
            f"{__name__}:export_conversation_task - Export failed for {session_id}: {e}",
            exc_info=True,
        )


@router.post("", response_model=StartSessionResponse, response_model_by_alias=True)
async def start_session(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
) -> StartSessionResponse:
    """
    Start a new chat session.

    Args:
        request: Raw request (client identity)
        sessions: Injected SessionStore

    Returns:
        StartSessionResponse: New session ID
    """
    session_id = await sessions.create_session(get_client_identity(request))
    return StartSessionResponse(session_id=session_id)


@router.get("/stats", response_model=SessionStatsResponse, response_model_by_alias=True)
async def session_stats(
    sessions: SessionStore = Depends(get_session_store),
) -> SessionStatsResponse:
    """Count active sessions."""
    return SessionStatsResponse(
        active_sessions=await sessions.count_active(),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/{session_id}", response_model=SessionStatusResponse, response_model_by_alias=True)
async def get_session_status(
    session_id: str,
    sessions: SessionStore = Depends(get_session_store),
) -> SessionStatusResponse:
    """
    Get session status.

    Raises:
        HTTPException(404): Session not found or expired
    """
    session = await sessions.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    return SessionStatusResponse(
        session_id=session.id,
        message_count=len(session.messages),
        started_at=session.started_at,
        last_activity_at=session.last_activity_at,
        contact_info=session.contact_info,
    )


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    sessions: SessionStore = Depends(get_session_store),
) -> None:
    """
    Delete session by ID.

    Raises:
        HTTPException(404): Session not found
    """
    if not await sessions.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/contact", response_model=ContactResponse, response_model_by_alias=True)
async def set_contact(
    session_id: str,
    body: ContactRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    sessions: SessionStore = Depends(get_session_store),
    ledger: ChatLogLedger = Depends(get_chat_log_ledger),
    exporter: TranscriptExporter | None = Depends(get_optional_transcript_exporter),
) -> ContactResponse:
    """
    Attach contact info to a session and queue its conversation export.

    Flow:
    1. Store contact info on the session (and its lookup key)
    2. Stamp today's chat logs for this session or client
    3. Enqueue a conversation-level export when recordkeeping is configured

    Raises:
        HTTPException(404): Session not found
    """
    session = await sessions.set_contact_info(session_id, body.contact)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    client_identity = session.client_identity or get_client_identity(request)
    updated = await ledger.attach_contact(session_id, client_identity, body.contact)

    export_queued = exporter is not None
    if exporter is not None:
        background_tasks.add_task(export_conversation_task, exporter, session_id)

    return ContactResponse(session_id=session_id, logs_updated=updated, export_queued=export_queued)
