"""
Concrete completion providers.
"""

from concierge.core.llm.providers.deepseek_provider import DeepSeekProvider
from concierge.core.llm.providers.gemini_provider import GeminiProvider
from concierge.core.llm.providers.openai_provider import OpenAIProvider

__all__ = ["DeepSeekProvider", "GeminiProvider", "OpenAIProvider"]
