"""
Completion providers and their factory.
"""

from concierge.core.llm.base import CompletionContext, CompletionProvider
from concierge.core.llm.factory import CompletionProviderFactory

__all__ = ["CompletionContext", "CompletionProvider", "CompletionProviderFactory"]
