"""
DeepSeek completion provider.

DeepSeek exposes an OpenAI-compatible API, so ChatOpenAI is pointed at its
base URL.

Dependencies: langchain_openai
System role: DeepSeek chat backend (default provider)
"""

from collections.abc import Callable
from datetime import datetime

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from concierge.configs.llm import LLMSettings
from concierge.core.exceptions import ProviderConfigurationError
from concierge.core.llm.base import LangChainCompletionProvider


class DeepSeekProvider(LangChainCompletionProvider):
    """DeepSeek chat completions."""

    name = "DeepSeek"

    def __init__(
        self,
        settings: LLMSettings,
        site_name: str = "Cafe Kinesi",
        model: BaseChatModel | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if model is None:
            if not settings.deepseek_api_key:
                raise ProviderConfigurationError(
                    "DEEPSEEK_API_KEY is not configured", setting="deepseek_api_key"
                )
            model = ChatOpenAI(
                model=settings.deepseek_model,
                api_key=settings.deepseek_api_key,
                base_url=settings.deepseek_base_url,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
                max_retries=0,
            )
        super().__init__(model, site_name=site_name, clock=clock)
