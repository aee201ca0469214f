"""
Completion provider registry and factory.

Providers are registered by name. Selection goes explicit name, then the
configured default, then the hard-coded default; a name that is unknown or
registered without an implementation logs a warning and falls back instead
of failing the request. Fallback only applies to selection: a provider that
fails while generating is never swapped for another one.

Dependencies: concierge.core.llm.providers
System role: LLM backend selection
"""

import logging
from collections.abc import Callable

from concierge.configs.llm import LLMSettings
from concierge.core.llm.base import CompletionProvider
from concierge.core.llm.providers import DeepSeekProvider, GeminiProvider, OpenAIProvider

logger = logging.getLogger(__name__)

ProviderConstructor = Callable[..., CompletionProvider]

DEFAULT_PROVIDER = "deepseek"

PROVIDER_REGISTRY: dict[str, ProviderConstructor | None] = {
    "openai": OpenAIProvider,
    "deepseek": DeepSeekProvider,
    "gemini": GeminiProvider,
    # TODO: add an Anthropic provider once langchain-anthropic is part of the stack
    "claude": None,
}


class CompletionProviderFactory:
    """Builds and caches completion providers by name."""

    def __init__(
        self,
        settings: LLMSettings,
        site_name: str = "Cafe Kinesi",
        registry: dict[str, ProviderConstructor | None] | None = None,
        default_provider: str = DEFAULT_PROVIDER,
    ) -> None:
        """
        Initialize factory.

        Args:
            settings: LLM settings passed to each provider constructor
            site_name: Persona name passed to each provider
            registry: Name to constructor mapping (None marks not implemented)
            default_provider: Hard-coded last-resort provider name
        """
        self.settings = settings
        self.site_name = site_name
        self.registry = dict(PROVIDER_REGISTRY if registry is None else registry)
        self.default_provider = default_provider
        self._instances: dict[str, CompletionProvider] = {}

    def register(self, name: str, constructor: ProviderConstructor | None) -> None:
        self.registry[name.lower()] = constructor
        self._instances.pop(name.lower(), None)

    def is_available(self, name: str | None) -> bool:
        return bool(name) and self.registry.get(name.lower()) is not None

    def resolve_name(self, name: str | None = None) -> str:
        """
        Pick the provider name to use.

        Args:
            name: Explicitly requested provider, if any

        Returns:
            str: Registered, implemented provider name
        """
        configured = self.settings.default_provider
        for candidate in (name, configured):
            if not candidate:
                continue
            if self.is_available(candidate):
                return candidate.lower()
            if candidate.lower() in self.registry:
                logger.warning(
                    f"{__name__}:resolve_name - Provider '{candidate}' is not implemented yet, falling back"
                )
            else:
                logger.warning(
                    f"{__name__}:resolve_name - Unknown provider '{candidate}', falling back"
                )
        return self.default_provider

    def create(self, name: str | None = None) -> CompletionProvider:
        """
        Return the provider for name, falling back on unknown names.

        Raises:
            ProviderConfigurationError: If the selected provider lacks credentials
        """
        resolved = self.resolve_name(name)
        provider = self._instances.get(resolved)
        if provider is None:
            constructor = self.registry[resolved]
            provider = constructor(self.settings, site_name=self.site_name)
            self._instances[resolved] = provider
            logger.info(f"{__name__}:create - Initialized provider {provider.name}")
        return provider
