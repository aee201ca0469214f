"""
Chat service for conversational Q&A with retrieval.

Orchestrates one chat turn: session lookup, retrieval, provider call and
message persistence. Writing the per-turn chat log is left to the caller
(the router enqueues it as a background task) so export latency and
failures never affect the reply.

Dependencies: concierge.core.session, concierge.core.llm, concierge.boundary.vdb
System role: Chat service orchestration layer
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass

from concierge.boundary.vdb.content_vector_store import ContentVectorStore
from concierge.core.llm.base import CompletionContext
from concierge.core.llm.factory import CompletionProviderFactory
from concierge.core.session.session_store import SessionStore
from concierge.models.chat import ChatResponse
from concierge.models.content import RetrievedDocument
from concierge.models.session import Message, Provenance

logger = logging.getLogger(__name__)


@dataclass
class ChatTurnRecord:
    """Data needed to write the chat log of a completed turn."""

    session_id: str
    query: str
    response: str
    processing_time_ms: float
    client_identity: str | None = None
    contact_info: str | None = None


def build_ground_truth(documents: list[RetrievedDocument]) -> str | None:
    """Render retrieved documents as the reference block given to the provider."""
    if not documents:
        return None
    sections = []
    for i, doc in enumerate(documents, 1):
        doc_type = doc.metadata.get("type", "content")
        title = doc.metadata.get("title") or doc.record_id
        sections.append(f"[{i}] ({doc_type}) {title}\n{doc.content}")
    return "\n\n".join(sections)


def build_provenance(documents: list[RetrievedDocument], provider_name: str) -> Provenance:
    """Summarize retrieval results for the assistant message."""
    sources = [
        {
            "id": doc.record_id,
            "type": doc.metadata.get("type"),
            "title": doc.metadata.get("title"),
            "slug": doc.metadata.get("slug"),
            "score": doc.score,
        }
        for doc in documents
    ]
    confidence = None
    if documents:
        confidence = min(max(max(doc.score for doc in documents), 0.0), 1.0)
    counts = Counter(doc.metadata.get("type", "unknown") for doc in documents)
    return Provenance(
        sources=sources,
        confidence=confidence,
        provider_name=provider_name,
        retrieval_counts=dict(counts),
    )


class ChatService:
    """Chat service for conversational Q&A."""

    def __init__(
        self,
        sessions: SessionStore,
        providers: CompletionProviderFactory,
        vector_store: ContentVectorStore,
        top_k: int = 5,
        history_window: int = 10,
    ) -> None:
        """
        Initialize chat service.

        Args:
            sessions: Session store
            providers: Completion provider factory
            vector_store: Retrieval store searched for each turn
            top_k: Number of documents retrieved per turn
            history_window: Number of prior messages sent to the provider
        """
        self.sessions = sessions
        self.providers = providers
        self.vector_store = vector_store
        self.top_k = top_k
        self.history_window = history_window

    async def handle_turn(
        self,
        message: str,
        session_id: str | None = None,
        client_identity: str | None = None,
        provider_name: str | None = None,
    ) -> tuple[ChatResponse, ChatTurnRecord]:
        """
        Process chat message through full conversation flow.

        Flow:
        1. Resume or create the session
        2. Retrieve reference documents
        3. Call the selected provider with history and ground truth
        4. Store user message and assistant reply

        Args:
            message: User's message
            session_id: Session to resume, if any
            client_identity: Visitor identity for new sessions and logs
            provider_name: Optional provider override

        Returns:
            tuple[ChatResponse, ChatTurnRecord]: Reply and the log record to persist

        Raises:
            ProviderError: If the completion call fails
            ProviderConfigurationError: If the selected provider lacks credentials
        """
        started = time.perf_counter()
        session = await self.sessions.get_or_create(session_id, client_identity)

        documents = await self.vector_store.similarity_search(message, k=self.top_k)
        provider = self.providers.create(provider_name)

        history = session.messages[-self.history_window:] if self.history_window else []
        context = CompletionContext(
            messages=history,
            session_id=session.id,
            ground_truth=build_ground_truth(documents),
        )
        reply = await provider.generate_response(message, context)
        provenance = build_provenance(documents, provider.name)

        await self.sessions.add_message(session.id, Message(role="user", content=message))
        await self.sessions.add_message(
            session.id,
            Message(
                role="assistant",
                content=reply,
                sources=provenance.sources,
                confidence=provenance.confidence,
                provider_name=provider.name,
                retrieval_counts=provenance.retrieval_counts,
            ),
        )

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            f"{__name__}:handle_turn - session_id={session.id} provider={provider.name} "
            f"sources={len(documents)} elapsed_ms={elapsed_ms}"
        )

        response = ChatResponse(session_id=session.id, reply=reply, provenance=provenance)
        record = ChatTurnRecord(
            session_id=session.id,
            query=message,
            response=reply,
            processing_time_ms=elapsed_ms,
            client_identity=session.client_identity or client_identity,
            contact_info=session.contact_info,
        )
        return response, record
