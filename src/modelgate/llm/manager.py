"""Process-wide LLM manager.

``LLMManager`` owns the settings, the startup ``EnvironmentSnapshot`` and the
``ProviderRegistry``. It builds model lists with the provider caches (probe
the cache, fetch on a miss, store the result) and hands out model handles.
Construct one at startup and pass it to whatever needs it.
"""

import asyncio
from typing import Any, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..base.loggable import Loggable
from ..config.environment import EnvironmentSnapshot
from ..config.settings import Settings
from .providers import BaseProvider
from .registry import ProviderRegistry, build_default_registry
from .types import ModelInfo, ProviderInfo, ResolutionInputs


class LLMManager(Loggable):
    """Resolve providers, model lists and model handles.

    Responsibilities:
    - Hold the explicit process-wide environment snapshot.
    - Refresh dynamic model lists through the per-provider caches.
    - Create model handles for a provider and model name.
    """

    def __init__(
        self,
        settings: Settings,
        environment: Optional[EnvironmentSnapshot] = None,
        registry: Optional[ProviderRegistry] = None,
        **provider_kwargs: Any,
    ):
        super().__init__()
        self.settings = settings
        self.environment = (
            environment if environment is not None else EnvironmentSnapshot.from_settings(settings)
        )
        provider_kwargs.setdefault("timeout", settings.model_list_timeout)
        self.registry = registry or build_default_registry(self.environment, **provider_kwargs)

    def get_provider(self, name: str) -> BaseProvider:
        """Return the provider registered under ``name`` or an alias.

        Raises:
            ValueError: If the provider is unknown.
        """
        provider = self.registry.get_provider(name)
        if provider is None:
            raise ValueError(f"Unknown provider: {name}")
        return provider

    def get_default_provider(self) -> BaseProvider:
        return self.get_provider(self.settings.default_provider)

    def get_provider_infos(self) -> List[ProviderInfo]:
        return [provider.describe() for provider in self.registry.providers()]

    def get_static_model_list(self) -> List[ModelInfo]:
        """Return the static models of every registered provider."""
        return [m for provider in self.registry.providers() for m in provider.static_models]

    @staticmethod
    def is_enabled(provider: BaseProvider, inputs: ResolutionInputs) -> bool:
        """A provider is enabled unless its setting says ``enabled=False``."""
        setting = inputs.setting_for(provider.name)
        return setting is None or setting.enabled is not False

    async def _dynamic_models(
        self, provider: BaseProvider, inputs: ResolutionInputs
    ) -> List[ModelInfo]:
        """Return dynamic models from the cache, fetching and storing on a miss."""
        if not provider.supports_dynamic_models:
            return []

        cached = provider.get_cached_models(inputs)
        if cached is not None:
            return cached

        models = await provider.fetch_dynamic_models(
            inputs.api_keys, inputs.setting_for(provider.name), inputs.server_env
        )
        provider.store_models(inputs, models)
        self.logger.info(f"Fetched {len(models)} dynamic models from {provider.name}")
        return models

    async def get_model_list_from_provider(
        self, name: str, inputs: ResolutionInputs
    ) -> List[ModelInfo]:
        """Return static then dynamic models for a single provider.

        Raises:
            ValueError: If the provider is unknown.
            httpx.HTTPError: If dynamic discovery fails.
        """
        provider = self.get_provider(name)
        dynamic = await self._dynamic_models(provider, inputs)
        return list(provider.static_models) + dynamic

    async def update_model_list(self, inputs: ResolutionInputs) -> List[ModelInfo]:
        """Return models of every enabled provider, refreshing dynamic lists.

        Providers are refreshed concurrently. A provider whose discovery fails
        is logged and contributes only its static models.
        """
        providers = [p for p in self.registry.providers() if self.is_enabled(p, inputs)]
        results = await asyncio.gather(
            *(self._dynamic_models(p, inputs) for p in providers), return_exceptions=True
        )

        models: List[ModelInfo] = []
        for provider, result in zip(providers, results):
            models.extend(provider.static_models)
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self.logger.error(
                    f"Failed to fetch dynamic models from {provider.name}: "
                    f"{type(result).__name__}: {result}"
                )
                continue
            models.extend(result)
        return models

    def get_model_instance(
        self, provider_name: str, model: str, inputs: Optional[ResolutionInputs] = None
    ) -> BaseChatModel:
        """Create a model handle for ``model`` served by ``provider_name``.

        Raises:
            ValueError: If the provider is unknown.
        """
        inputs = inputs or ResolutionInputs()
        provider = self.get_provider(provider_name)
        handle = provider.create_model_handle(
            model,
            server_env=inputs.server_env,
            api_keys=inputs.api_keys,
            provider_settings=inputs.provider_settings,
        )
        self.logger.info(f"Created model handle: {provider.name}:{model}")
        return handle
