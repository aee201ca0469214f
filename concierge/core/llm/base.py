"""
Completion provider contract.

A provider turns one visitor message plus conversation context into a
reply with exactly one remote call. Failures are raised as ProviderError
and never retried or swapped to another provider.

Dependencies: langchain_core, concierge.models.session
System role: LLM backend abstraction
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from concierge.core.exceptions import ProviderError
from concierge.core.llm.prompts import build_system_prompt
from concierge.models.session import Message

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I'm sorry, I couldn't come up with an answer to that."


@dataclass
class CompletionContext:
    """Everything a provider needs besides the message itself."""

    messages: list[Message] = field(default_factory=list)
    session_id: str | None = None
    ground_truth: str | None = None
    site_info: dict[str, Any] | None = None


class CompletionProvider(ABC):
    """A named completion backend."""

    name: str

    @abstractmethod
    async def generate_response(self, message: str, context: CompletionContext) -> str:
        """Return the assistant reply for message."""


def _content_text(content: Any) -> str | None:
    """Extract text from a chat model content payload, None if it holds none."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
            else:
                return None
        return "".join(parts)
    return None


class LangChainCompletionProvider(CompletionProvider):
    """Provider backed by a LangChain chat model."""

    def __init__(
        self,
        model: BaseChatModel,
        site_name: str = "Cafe Kinesi",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            model: Chat model configured with retries disabled
            site_name: Name used in the assistant persona
            clock: Source of the local time written into the prompt
        """
        self._model = model
        self._site_name = site_name
        self._clock = clock or datetime.now

    def build_messages(self, message: str, context: CompletionContext) -> list[BaseMessage]:
        system_prompt = build_system_prompt(
            site_name=self._site_name,
            now=self._clock(),
            ground_truth=context.ground_truth,
            site_info=context.site_info,
        )
        messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
        for prior in context.messages:
            if prior.role == "user":
                messages.append(HumanMessage(content=prior.content))
            else:
                messages.append(AIMessage(content=prior.content))
        messages.append(HumanMessage(content=message))
        return messages

    async def generate_response(self, message: str, context: CompletionContext) -> str:
        """
        Generate a reply with a single model call.

        Raises:
            ProviderError: On any upstream failure or non-text response
        """
        messages = self.build_messages(message, context)
        logger.info(
            f"{__name__}:generate_response - {self.name} session_id={context.session_id} "
            f"history={len(context.messages)} grounded={context.ground_truth is not None}"
        )

        try:
            response = await self._model.ainvoke(messages)
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            upstream = getattr(e, "response", None)
            body = getattr(upstream, "text", None)
            logger.error(
                f"{__name__}:generate_response - {self.name} failed status={status_code} body={body}",
                exc_info=True,
            )
            raise ProviderError(self.name, str(e), status_code=status_code, body=body) from e

        text = _content_text(getattr(response, "content", None))
        if text is None:
            raise ProviderError(
                self.name,
                "Invalid response format",
                body=repr(getattr(response, "content", response)),
            )
        if not text.strip():
            logger.warning(f"{__name__}:generate_response - {self.name} returned empty content")
            return EMPTY_REPLY
        return text
