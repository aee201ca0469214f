"""
Test suite for completion providers and the system prompt.

Uses LangChain fake chat models and mocks instead of remote APIs.

System role: Verification of LLM backend behavior
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from concierge.configs.llm import LLMSettings
from concierge.core.exceptions import ProviderConfigurationError, ProviderError
from concierge.core.llm.base import EMPTY_REPLY, CompletionContext
from concierge.core.llm.prompts import build_system_prompt
from concierge.core.llm.providers import DeepSeekProvider, GeminiProvider, OpenAIProvider
from concierge.models.session import Message

FIXED_NOW = datetime(2025, 3, 14, 15, 9)


@pytest.fixture
def llm_settings() -> LLMSettings:
    """Provide LLM settings without any API keys."""
    return LLMSettings(openai_api_key=None, deepseek_api_key=None, google_api_key=None)


@pytest.fixture
def mock_model() -> MagicMock:
    """Provide mock chat model returning a fixed reply."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="We open at 9am."))
    return model


class TestSystemPrompt:
    """Test suite for build_system_prompt."""

    def test_prompt_should_contain_literal_date_and_time(self) -> None:
        """Test relative dates are anchored to the supplied clock."""
        prompt = build_system_prompt("Cafe Kinesi", FIXED_NOW)

        assert "Friday, 2025-03-14" in prompt
        assert "2025-03" in prompt
        assert "15:09" in prompt

    def test_ground_truth_should_replace_persona(self) -> None:
        """Test ground truth overrides the persona/site info block."""
        grounded = build_system_prompt("Cafe Kinesi", FIXED_NOW, ground_truth="FAQ: Hours?")
        plain = build_system_prompt("Cafe Kinesi", FIXED_NOW, site_info={"hours": "9-17"})

        assert "FAQ: Hours?" in grounded
        assert "Site information" not in grounded
        assert "Site information" in plain
        assert '"hours": "9-17"' in plain

    def test_prompt_should_be_deterministic(self) -> None:
        """Test identical inputs build identical prompts."""
        assert build_system_prompt("A", FIXED_NOW, "x") == build_system_prompt("A", FIXED_NOW, "x")


class TestLangChainProvider:
    """Test suite for the shared LangChain provider behavior."""

    @pytest.mark.asyncio
    async def test_generate_should_return_model_text(self, llm_settings: LLMSettings) -> None:
        """Test a fake chat model reply is returned verbatim."""
        # Arrange
        model = FakeListChatModel(responses=["Lattes are 500 yen."])
        provider = OpenAIProvider(llm_settings, model=model, clock=lambda: FIXED_NOW)

        # Act
        reply = await provider.generate_response("How much is a latte?", CompletionContext())

        # Assert
        assert reply == "Lattes are 500 yen."

    @pytest.mark.asyncio
    async def test_messages_should_include_prefix_history_and_question(
        self, llm_settings: LLMSettings, mock_model: MagicMock
    ) -> None:
        """Test the single model call carries system prompt, history and message."""
        provider = DeepSeekProvider(llm_settings, model=mock_model, clock=lambda: FIXED_NOW)
        context = CompletionContext(
            messages=[
                Message(role="user", content="Hi"),
                Message(role="assistant", content="Hello!"),
            ],
            session_id="s1",
            ground_truth="Shop hours: 9-17",
        )

        await provider.generate_response("When do you open?", context)

        mock_model.ainvoke.assert_awaited_once()
        sent = mock_model.ainvoke.await_args.args[0]
        assert isinstance(sent[0], SystemMessage)
        assert "2025-03-14" in sent[0].content
        assert "Shop hours: 9-17" in sent[0].content
        assert [type(m) for m in sent[1:]] == [HumanMessage, AIMessage, HumanMessage]
        assert sent[-1].content == "When do you open?"

    @pytest.mark.asyncio
    async def test_upstream_error_should_raise_provider_error_with_status(
        self, llm_settings: LLMSettings, mock_model: MagicMock
    ) -> None:
        """Test exceptions are wrapped with upstream status and body."""
        upstream = Exception("rate limited")
        upstream.status_code = 429
        upstream.response = httpx.Response(429, text='{"error": "slow down"}')
        mock_model.ainvoke = AsyncMock(side_effect=upstream)
        provider = OpenAIProvider(llm_settings, model=mock_model)

        with pytest.raises(ProviderError) as exc_info:
            await provider.generate_response("hi", CompletionContext())

        assert exc_info.value.provider == "OpenAI"
        assert exc_info.value.status_code == 429
        assert exc_info.value.body == '{"error": "slow down"}'
        mock_model.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_text_content_should_raise_provider_error(
        self, llm_settings: LLMSettings, mock_model: MagicMock
    ) -> None:
        """Test malformed responses are rejected."""
        mock_model.ainvoke = AsyncMock(
            return_value=AIMessage(content=[{"type": "image_url", "image_url": {"url": "x"}}])
        )
        provider = GeminiProvider(llm_settings, model=mock_model)

        with pytest.raises(ProviderError):
            await provider.generate_response("hi", CompletionContext())

    @pytest.mark.asyncio
    async def test_text_parts_should_be_joined(self, llm_settings: LLMSettings, mock_model: MagicMock) -> None:
        """Test list content made of text parts is accepted."""
        mock_model.ainvoke = AsyncMock(
            return_value=AIMessage(content=[{"type": "text", "text": "Hello "}, "there"])
        )
        provider = GeminiProvider(llm_settings, model=mock_model)

        assert await provider.generate_response("hi", CompletionContext()) == "Hello there"

    @pytest.mark.asyncio
    async def test_empty_content_should_return_apology(
        self, llm_settings: LLMSettings, mock_model: MagicMock
    ) -> None:
        """Test an empty reply is replaced with the fixed apology."""
        mock_model.ainvoke = AsyncMock(return_value=AIMessage(content=""))
        provider = DeepSeekProvider(llm_settings, model=mock_model)

        assert await provider.generate_response("hi", CompletionContext()) == EMPTY_REPLY


class TestProviderConfiguration:
    """Test suite for provider construction."""

    @pytest.mark.parametrize("provider_cls", [OpenAIProvider, DeepSeekProvider, GeminiProvider])
    def test_missing_api_key_should_raise(self, provider_cls, llm_settings: LLMSettings) -> None:
        """Test providers refuse to build without credentials."""
        with pytest.raises(ProviderConfigurationError):
            provider_cls(llm_settings)

    def test_deepseek_should_target_openai_compatible_endpoint(self) -> None:
        """Test DeepSeek uses ChatOpenAI pointed at its base URL."""
        settings = LLMSettings(deepseek_api_key="sk-test")

        provider = DeepSeekProvider(settings)

        assert provider._model.model_name == "deepseek-chat"
        assert provider._model.openai_api_base == "https://api.deepseek.com/v1"
        assert provider._model.max_retries == 0
        assert provider._model.temperature == 0.1
