"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, concierge.api, concierge.observability, concierge.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from concierge.api.deps.dependencies import get_service_cache
from concierge.api.routers import (
    admin_router,
    chat_router,
    health_router,
    knowledge_router,
    sessions_router,
)
from concierge.configs import get_settings
from concierge.core.exceptions import ConfigurationError
from concierge.observability.logger import configure_logging
from concierge.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Starts the rate limiter sweeps on startup; stops them and closes
    network clients on shutdown.
    """
    cache = get_service_cache()
    limiters = [cache.knowledge_limiter, cache.chat_limiter]
    for limiter in limiters:
        limiter.start()
    logger.info(f"{__name__}:lifespan - Rate limiter sweeps started")

    yield

    for limiter in limiters:
        await limiter.stop()
    await cache.aclose()
    cache.clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"{__name__}:configuration_error_handler - {request.url.path}: {exc}")
    content = {"success": False, "error": "Service is not configured"}
    if get_settings().debug:
        content["details"] = {"message": exc.message, **exc.details}
    return JSONResponse(status_code=503, content=content)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.site_name} Concierge API",
        description="Retrieval-grounded chat, public knowledge feed and transcript export",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(ConfigurationError, configuration_error_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(knowledge_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "concierge.main:app",
        host="0.0.0.0",
        port=8000,
    )
