"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: concierge.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from concierge.api.deps import get_service_cache
from concierge.api.deps.dependencies import ServiceCache


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    cache: ServiceCache = Depends(get_service_cache),
) -> HealthResponse:
    """Vector store health check."""
    count = await cache.vector_store.count()
    return HealthResponse(status="healthy", message=f"Vector store accessible ({count} documents)")
