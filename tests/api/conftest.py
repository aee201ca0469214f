"""
API test fixtures.

Builds a bare FastAPI app with the project routers so each test can swap
collaborators through dependency_overrides.

Dependencies: fastapi
System role: HTTP test infrastructure
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from concierge.api.routers import (
    admin_router,
    chat_router,
    health_router,
    knowledge_router,
    sessions_router,
)


@pytest.fixture
def app() -> FastAPI:
    """Provide app with all routers under /api/v1."""
    application = FastAPI()
    for router in (health_router, sessions_router, chat_router, knowledge_router, admin_router):
        application.include_router(router, prefix="/api/v1")
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide test client."""
    return TestClient(app)
