"""Provider registry.

Providers are selected by name or alias from an explicit registry rather than
discovered through subclassing.
"""

from typing import Any, Dict, List, Optional

from ..base.loggable import Loggable
from ..config.environment import EnvironmentSnapshot
from ..config.settings import PROVIDER_ALIASES
from .providers import (
    AnthropicProvider,
    BaseProvider,
    GoogleProvider,
    OllamaProvider,
    OpenAILikeProvider,
    OpenAIProvider,
)

BUILTIN_PROVIDERS = (
    OpenAIProvider,
    AnthropicProvider,
    GoogleProvider,
    OpenAILikeProvider,
    OllamaProvider,
)


class ProviderRegistry(Loggable):
    """Registry for managing LLM providers.

    Lookups try the exact name first, then the lowercase aliases from
    ``config.settings.PROVIDER_ALIASES`` (``"claude"`` resolves to
    ``"Anthropic"``, ``"gemini"`` to ``"Google"``).
    """

    def __init__(self) -> None:
        super().__init__()
        self._providers: Dict[str, BaseProvider] = {}

    def get_provider(self, provider_name: str) -> Optional[BaseProvider]:
        """Return provider by name or alias.

        Args:
            provider_name: Provider key or alias.

        Returns:
            The provider instance if registered; otherwise, ``None``.
        """
        provider = self._providers.get(provider_name)
        if provider is None:
            canonical = PROVIDER_ALIASES.get(provider_name.lower())
            if canonical is not None:
                provider = self._providers.get(canonical)
        return provider

    def register_provider(self, provider: BaseProvider, name: Optional[str] = None) -> None:
        """Register a provider under ``name`` (defaults to ``provider.name``).

        Re-registering a name replaces the previous provider.
        """
        name = name or provider.name
        self._providers[name] = provider
        self.logger.info(f"Registered provider: {name}")

    def get_available_providers(self) -> List[str]:
        """Return the list of registered provider names."""
        return list(self._providers.keys())

    def is_provider_available(self, provider_name: str) -> bool:
        """Return whether a provider is registered under this name or alias."""
        return self.get_provider(provider_name) is not None

    def providers(self) -> List[BaseProvider]:
        """Return the unique provider instances in registration order."""
        seen = set()
        unique = []
        for provider in self._providers.values():
            if id(provider) not in seen:
                seen.add(id(provider))
                unique.append(provider)
        return unique


def build_default_registry(
    environment: Optional[EnvironmentSnapshot] = None, **provider_kwargs: Any
) -> ProviderRegistry:
    """Return a registry holding one instance of every built-in provider.

    Args:
        environment: Snapshot handed to every provider.
        **provider_kwargs: Extra constructor arguments (``timeout``,
            ``transport``) applied to every provider.
    """
    registry = ProviderRegistry()
    for provider_cls in BUILTIN_PROVIDERS:
        registry.register_provider(provider_cls(environment=environment, **provider_kwargs))
    return registry
