"""
OpenAI completion provider.

Dependencies: langchain_openai
System role: OpenAI chat backend
"""

from collections.abc import Callable
from datetime import datetime

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from concierge.configs.llm import LLMSettings
from concierge.core.exceptions import ProviderConfigurationError
from concierge.core.llm.base import LangChainCompletionProvider


class OpenAIProvider(LangChainCompletionProvider):
    """OpenAI chat completions via ChatOpenAI."""

    name = "OpenAI"

    def __init__(
        self,
        settings: LLMSettings,
        site_name: str = "Cafe Kinesi",
        model: BaseChatModel | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if model is None:
            if not settings.openai_api_key:
                raise ProviderConfigurationError(
                    "OPENAI_API_KEY is not configured", setting="openai_api_key"
                )
            model = ChatOpenAI(
                model=settings.openai_model,
                api_key=settings.openai_api_key,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
                max_retries=0,
            )
        super().__init__(model, site_name=site_name, clock=clock)
