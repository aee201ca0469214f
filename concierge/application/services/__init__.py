"""
Application services.
"""

from concierge.application.services.chat_service import ChatService, ChatTurnRecord
from concierge.application.services.knowledge_service import KnowledgeService

__all__ = ["ChatService", "ChatTurnRecord", "KnowledgeService"]
