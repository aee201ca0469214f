"""
Test suite for POST /api/v1/chat.

System role: Verification of the chat endpoint
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from concierge.api.deps import get_chat_limiter, get_chat_log_ledger, get_chat_service
from concierge.application.services.chat_service import ChatTurnRecord
from concierge.core.exceptions import ProviderConfigurationError, ProviderError
from concierge.core.rate_limiter import FixedWindowRateLimiter
from concierge.models.chat import ChatResponse
from concierge.models.session import Provenance


@pytest.fixture
def chat_service() -> MagicMock:
    """Provide mocked chat service returning one turn."""
    service = MagicMock()
    response = ChatResponse(
        session_id="s-1",
        reply="We open at 9.",
        provenance=Provenance(provider_name="DeepSeek", confidence=0.7),
    )
    record = ChatTurnRecord(session_id="s-1", query="When do you open?", response="We open at 9.", processing_time_ms=42.0)
    service.handle_turn = AsyncMock(return_value=(response, record))
    return service


@pytest.fixture
def chat_ledger() -> MagicMock:
    """Provide mocked chat log ledger."""
    ledger = MagicMock()
    ledger.record_turn = AsyncMock()
    return ledger


@pytest.fixture
def limiter(fake_clock) -> FixedWindowRateLimiter:
    """Provide limiter admitting one message per minute."""
    return FixedWindowRateLimiter(limit=1, window_seconds=60, clock=fake_clock, name="chat")


@pytest.fixture(autouse=True)
def overrides(app, chat_service, chat_ledger, limiter):
    """Wire mocks into the app."""
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_chat_log_ledger] = lambda: chat_ledger
    app.dependency_overrides[get_chat_limiter] = lambda: limiter
    yield
    app.dependency_overrides.clear()


class TestChatEndpoint:
    """Test suite for the chat route."""

    def test_chat_should_reply_and_write_log(self, client, chat_service: MagicMock, chat_ledger: MagicMock) -> None:
        """Test a turn returns the reply and queues the ledger write."""
        # Act
        response = client.post(
            "/api/v1/chat",
            json={"sessionId": "s-1", "message": "When do you open?", "provider": "openai"},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"] == "s-1"
        assert body["reply"] == "We open at 9."
        assert body["provenance"]["provider_name"] == "DeepSeek"
        chat_service.handle_turn.assert_awaited_once_with(
            message="When do you open?",
            session_id="s-1",
            client_identity="testclient",
            provider_name="openai",
        )
        assert chat_ledger.record_turn.await_args.kwargs["session_id"] == "s-1"

    def test_ledger_failure_should_not_fail_turn(self, client, chat_ledger: MagicMock) -> None:
        """Test chat log errors stay in the background task."""
        chat_ledger.record_turn.side_effect = RuntimeError("kv down")

        response = client.post("/api/v1/chat", json={"message": "hi"})

        assert response.status_code == 200

    def test_second_message_in_window_should_return_429(self, client) -> None:
        """Test the chat limiter rejects excess messages."""
        client.post("/api/v1/chat", json={"message": "hi"})

        response = client.post("/api/v1/chat", json={"message": "again"})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert response.json()["retryAfter"] == 60

    def test_provider_error_should_return_502(self, client, chat_service: MagicMock) -> None:
        """Test provider failures surface as bad gateway."""
        chat_service.handle_turn.side_effect = ProviderError("DeepSeek", "upstream 500", status_code=500)

        response = client.post("/api/v1/chat", json={"message": "hi"})

        assert response.status_code == 502
        assert response.json()["detail"]["success"] is False

    def test_missing_credentials_should_return_503(self, client, chat_service: MagicMock) -> None:
        """Test unconfigured providers surface as service unavailable."""
        chat_service.handle_turn.side_effect = ProviderConfigurationError("OPENAI_API_KEY is not set", "OPENAI_API_KEY")

        response = client.post("/api/v1/chat", json={"message": "hi"})

        assert response.status_code == 503

    def test_empty_message_should_return_422(self, client) -> None:
        """Test request validation."""
        response = client.post("/api/v1/chat", json={"message": ""})

        assert response.status_code == 422
