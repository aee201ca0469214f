"""
API routers.
"""

from concierge.api.routers.admin import router as admin_router
from concierge.api.routers.chat import router as chat_router
from concierge.api.routers.health import router as health_router
from concierge.api.routers.knowledge import router as knowledge_router
from concierge.api.routers.sessions import router as sessions_router

__all__ = [
    "admin_router",
    "chat_router",
    "health_router",
    "knowledge_router",
    "sessions_router",
]
