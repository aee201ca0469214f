"""
Gemini completion provider.

Dependencies: langchain_google_genai
System role: Google Gemini chat backend
"""

from collections.abc import Callable
from datetime import datetime

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from concierge.configs.llm import LLMSettings
from concierge.core.exceptions import ProviderConfigurationError
from concierge.core.llm.base import LangChainCompletionProvider


class GeminiProvider(LangChainCompletionProvider):
    """Gemini chat completions via ChatGoogleGenerativeAI."""

    name = "Gemini"

    def __init__(
        self,
        settings: LLMSettings,
        site_name: str = "Cafe Kinesi",
        model: BaseChatModel | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if model is None:
            if not settings.google_api_key:
                raise ProviderConfigurationError(
                    "GOOGLE_API_KEY is not configured", setting="google_api_key"
                )
            model = ChatGoogleGenerativeAI(
                model=settings.gemini_model,
                google_api_key=settings.google_api_key,
                temperature=settings.temperature,
                max_output_tokens=settings.max_tokens,
                # counts attempts, so 1 means a single call
                max_retries=1,
            )
        super().__init__(model, site_name=site_name, clock=clock)
