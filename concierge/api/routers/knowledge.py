"""Public knowledge API endpoint.

Routes:
- GET /knowledge - CMS content (blog, course, instructor, event, all) as JSON

Admission-controlled per client identity by a fixed-window rate limiter.

Dependencies: concierge.application.services.knowledge_service, concierge.core.rate_limiter
System role: Public read API for AI agents
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from concierge.api.deps import get_knowledge_limiter, get_knowledge_service
from concierge.api.routers.router_utils import get_client_identity, to_http_exception
from concierge.application.services.knowledge_service import KnowledgeService, parse_limit
from concierge.core.exceptions import CMSError
from concierge.core.rate_limiter import FixedWindowRateLimiter
from concierge.models.common import KnowledgeMeta, KnowledgeResponse, RateLimitedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])

CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


@router.get(
    "",
    response_model=KnowledgeResponse,
    responses={429: {"model": RateLimitedResponse}},
)
async def get_knowledge(
    request: Request,
    type: str = Query(default="all", description="blog | course | instructor | event | all"),
    q: str | None = Query(default=None, description="Substring to match"),
    limit: str | None = Query(default=None, description="Items to return (1-100, default 10)"),
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
    limiter: FixedWindowRateLimiter = Depends(get_knowledge_limiter),
):
    """
    Return CMS content for external agents.

    Args:
        request: Raw request (client identity)
        type: Content type filter
        q: Optional search term
        limit: Raw limit parameter, clamped to 1-100
        knowledge_service: Injected KnowledgeService
        limiter: Injected knowledge rate limiter

    Returns:
        JSONResponse: 200 with data and meta, or 429 with a retry hint

    Raises:
        HTTPException(500): CMS query failed
    """
    started = time.perf_counter()
    client_identity = get_client_identity(request)
    parsed_limit = parse_limit(limit)
    logger.info(
        f"{__name__}:get_knowledge - Request from {client_identity}: type={type}, q={q}, limit={parsed_limit}"
    )

    decision = limiter.check(client_identity)
    if not decision.allowed:
        logger.warning(f"{__name__}:get_knowledge - Rate limit exceeded for {client_identity}")
        body = RateLimitedResponse(
            message="Request limit exceeded. Please retry after the window resets.",
            retry_after=decision.retry_after_seconds,
        )
        return JSONResponse(
            status_code=429,
            content=body.model_dump(by_alias=True),
            headers={
                "Retry-After": str(decision.retry_after_seconds),
                "X-RateLimit-Limit": str(decision.limit),
                "X-RateLimit-Remaining": "0",
            },
        )

    try:
        content_type, data = await knowledge_service.search(type, q, parsed_limit)
    except CMSError as e:
        logger.error(f"{__name__}:get_knowledge - CMS error: {e}")
        raise to_http_exception(e, 500, "Internal server error")

    processing_time = round((time.perf_counter() - started) * 1000)
    body = KnowledgeResponse(
        data=data,
        meta=KnowledgeMeta(
            count=len(data),
            type=content_type,
            query=q or None,
            limit=parsed_limit,
            processing_time=processing_time,
            timestamp=datetime.now(timezone.utc).isoformat(),
        ),
    )
    logger.info(f"{__name__}:get_knowledge - Success: {len(data)} items in {processing_time}ms")

    return JSONResponse(
        content=body.model_dump(by_alias=True),
        headers={
            "Cache-Control": CACHE_CONTROL,
            "X-Response-Time": f"{processing_time}ms",
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": str(decision.remaining),
        },
    )
