"""Chat API endpoints.

Routes:
- POST /chat - Send a chat message, creating a session when none is given

The per-turn chat log is written by a background task after the response
is sent, so a ledger failure never fails the turn.

Dependencies: concierge.application.services.chat_service, concierge.core.export
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from concierge.api.deps import (
    get_chat_limiter,
    get_chat_log_ledger,
    get_chat_service,
)
from concierge.api.routers.router_utils import get_client_identity, to_http_exception
from concierge.application.services.chat_service import ChatService, ChatTurnRecord
from concierge.core.exceptions import (
    ConfigurationError,
    ProviderError,
    VectorStoreError,
)
from concierge.core.export import ChatLogLedger
from concierge.core.rate_limiter import FixedWindowRateLimiter
from concierge.models.chat import ChatRequest, ChatResponse
from concierge.models.common import RateLimitedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


async def record_chat_turn(ledger: ChatLogLedger, record: ChatTurnRecord) -> None:
    """Write the chat log for a completed turn."""
    try:
        await ledger.record_turn(
            session_id=record.session_id,
            query=record.query,
            response=record.response,
            processing_time_ms=record.processing_time_ms,
            client_identity=record.client_identity,
            contact_info=record.contact_info,
        )
    except Exception as e:
        logger.error(
            f"{__name__}:record_chat_turn - Failed to write chat log for {record.session_id}: {e}",
            exc_info=True,
        )


@router.post(
    "",
    response_model=ChatResponse,
    response_model_by_alias=True,
    responses={429: {"model": RateLimitedResponse}},
)
async def chat(
    request: ChatRequest,
    http_request: Request,
    background_tasks: BackgroundTasks,
    chat_service: ChatService = Depends(get_chat_service),
    ledger: ChatLogLedger = Depends(get_chat_log_ledger),
    limiter: FixedWindowRateLimiter = Depends(get_chat_limiter),
):
    """Send chat message with conversational memory.

    Flow:
    1. Admit the client through the chat rate limiter
    2. Process the turn through ChatService
    3. Enqueue the chat log write
    4. Return reply with provenance

    Args:
        request: ChatRequest with optional sessionId and message
        http_request: Raw request (client identity)
        background_tasks: FastAPI background task queue
        chat_service: Injected ChatService
        ledger: Injected ChatLogLedger
        limiter: Injected chat rate limiter

    Returns:
        ChatResponse: Reply, session id and provenance

    Raises:
        HTTPException(502): Completion provider failed
        HTTPException(503): Provider or retrieval store unavailable
    """
    client_identity = get_client_identity(http_request)
    decision = limiter.check(client_identity)
    if not decision.allowed:
        retry_after = decision.retry_after_seconds
        logger.warning(f"{__name__}:chat - Rate limit exceeded for {client_identity}")
        body = RateLimitedResponse(
            message="Too many messages. Please wait a moment and try again.",
            retry_after=retry_after,
        )
        return JSONResponse(
            status_code=429,
            content=body.model_dump(by_alias=True),
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(decision.limit),
                "X-RateLimit-Remaining": "0",
            },
        )

    try:
        response, record = await chat_service.handle_turn(
            message=request.message,
            session_id=request.session_id,
            client_identity=client_identity,
            provider_name=request.provider,
        )
    except ProviderError as e:
        logger.error(f"{__name__}:chat - Provider error: {e}")
        raise to_http_exception(e, 502, "The assistant is temporarily unavailable")
    except ConfigurationError as e:
        logger.error(f"{__name__}:chat - Configuration error: {e}")
        raise to_http_exception(e, 503, "The assistant is not configured")
    except VectorStoreError as e:
        logger.error(f"{__name__}:chat - Retrieval error: {e}")
        raise to_http_exception(e, 503, "Knowledge search is temporarily unavailable")

    background_tasks.add_task(record_chat_turn, ledger, record)
    return response
