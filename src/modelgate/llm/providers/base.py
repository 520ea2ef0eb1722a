"""Provider base class: endpoint resolution and dynamic model caching.

``BaseProvider`` combines four precedence-ordered sources into a base URL and
API key, caches dynamically discovered models under a fingerprint of the
inputs that could change them, and leaves handle construction to concrete
providers through ``create_model_handle``.

Resolution order (first non-empty wins):

- base URL: per-provider setting, server env, process env, environment
  snapshot, static ``ProviderConfig.base_url``. One trailing slash is removed.
- API key: caller ``api_keys[name]``, server env, process env, environment
  snapshot.

Missing values resolve to ``None``; nothing is validated at this layer.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Sequence

import httpx
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from ...base.loggable import Loggable
from ...config.environment import EnvironmentSnapshot
from ..types import (
    CachedModelSet,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    ProviderSetting,
    ResolutionInputs,
    ResolvedEndpoint,
)

DEFAULT_DISCOVERY_TIMEOUT = 10.0


class BaseProvider(Loggable, ABC):
    """Abstract base class for LLM providers.

    Subclasses set ``name``, ``config`` and ``static_models`` and implement
    ``create_model_handle``. Providers able to list models remotely set
    ``supports_dynamic_models = True`` and override ``fetch_dynamic_models``.
    """

    name: ClassVar[str]
    config: ClassVar[ProviderConfig] = ProviderConfig()
    static_models: ClassVar[List[ModelInfo]] = []
    supports_dynamic_models: ClassVar[bool] = False

    get_api_key_link: ClassVar[Optional[str]] = None
    label_for_get_api_key: ClassVar[Optional[str]] = None
    icon: ClassVar[Optional[str]] = None

    def __init__(
        self,
        environment: Optional[EnvironmentSnapshot] = None,
        timeout: float = DEFAULT_DISCOVERY_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self.environment = environment if environment is not None else EnvironmentSnapshot()
        self.timeout = timeout
        self._transport = transport
        self._cached_models: Optional[CachedModelSet] = None

    def _lookup_env(self, key: Optional[str], server_env: Dict[str, str]) -> Optional[str]:
        """Return the first non-empty value for ``key`` across env sources."""
        if not key:
            return None
        return server_env.get(key) or os.environ.get(key) or self.environment.get(key) or None

    def resolve_endpoint(
        self,
        inputs: ResolutionInputs,
        default_base_url_key: Optional[str] = None,
        default_api_token_key: Optional[str] = None,
    ) -> ResolvedEndpoint:
        """Resolve the base URL and API key for this provider.

        Args:
            inputs: Caller-supplied api keys, provider settings and server env.
            default_base_url_key: Env variable name used when
                ``config.base_url_key`` is unset.
            default_api_token_key: Env variable name used when
                ``config.api_token_key`` is unset.

        Returns:
            A ``ResolvedEndpoint``; either field may be ``None``.
        """
        setting = inputs.setting_for(self.name)
        settings_base_url = setting.base_url if setting else None

        base_url_key = self.config.base_url_key or default_base_url_key
        base_url = (
            settings_base_url
            or self._lookup_env(base_url_key, inputs.server_env)
            or self.config.base_url
            or None
        )
        if base_url and base_url.endswith("/"):
            base_url = base_url[:-1]

        api_token_key = self.config.api_token_key or default_api_token_key
        api_key = inputs.api_keys.get(self.name) or self._lookup_env(
            api_token_key, inputs.server_env
        )

        return ResolvedEndpoint(base_url=base_url, api_key=api_key)

    def compute_fingerprint(self, inputs: ResolutionInputs) -> str:
        """Return the cache key for the dynamic models of this provider.

        Only this provider's api key and settings entries take part, plus the
        whole server env map.
        """
        setting = inputs.setting_for(self.name)
        return json.dumps(
            {
                "apiKeys": inputs.api_keys.get(self.name),
                "providerSettings": setting.to_dict() if setting else None,
                "serverEnv": inputs.server_env,
            },
            sort_keys=True,
            separators=(",", ":"),
        )

    def get_cached_models(self, inputs: ResolutionInputs) -> Optional[List[ModelInfo]]:
        """Return cached dynamic models if they are still valid for ``inputs``.

        A fingerprint mismatch evicts the cache. Never fetches.
        """
        if self._cached_models is None:
            return None

        if self._cached_models.fingerprint != self.compute_fingerprint(inputs):
            self.logger.debug(f"Model cache for {self.name} is stale; evicting")
            self._cached_models = None
            return None

        return list(self._cached_models.models)

    def store_models(self, inputs: ResolutionInputs, models: Sequence[ModelInfo]) -> None:
        """Overwrite the cache with ``models`` keyed by the fingerprint of ``inputs``."""
        self._cached_models = CachedModelSet(
            fingerprint=self.compute_fingerprint(inputs), models=tuple(models)
        )
        self.logger.debug(f"Cached {len(models)} dynamic models for {self.name}")

    def clear_cache(self) -> None:
        self._cached_models = None

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        """List models from the provider's API.

        Only meaningful when ``supports_dynamic_models`` is set. Network and
        authentication errors propagate to the caller.

        Raises:
            NotImplementedError: If the provider has no dynamic discovery.
        """
        raise NotImplementedError(f"{self.name} does not support dynamic models")

    def _discovery_inputs(
        self,
        api_keys: Optional[Dict[str, str]],
        settings: Optional[ProviderSetting],
        server_env: Optional[Dict[str, str]],
    ) -> ResolutionInputs:
        """Rebuild resolution inputs from ``fetch_dynamic_models`` arguments."""
        provider_settings = {self.name: settings} if settings is not None else {}
        return ResolutionInputs(
            api_keys=api_keys or {},
            provider_settings=provider_settings,
            server_env=server_env or {},
        )

    def http_client(self) -> httpx.AsyncClient:
        """Return a client for discovery calls; callers own its lifetime."""
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses.
        """
        async with self.http_client() as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            return response.json()

    @abstractmethod
    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        """Create a provider-specific chat model for ``model``.

        Args:
            model: Provider-specific model identifier.
            server_env: Server-side variables.
            api_keys: Provider name to API key.
            provider_settings: Provider name to settings.

        Returns:
            A concrete ``BaseChatModel`` instance.
        """

    def describe(self) -> ProviderInfo:
        """Return the public descriptor for this provider."""
        return ProviderInfo(
            name=self.name,
            static_models=list(self.static_models),
            supports_dynamic_models=self.supports_dynamic_models,
            get_api_key_link=self.get_api_key_link,
            label_for_get_api_key=self.label_for_get_api_key,
            icon=self.icon,
        )


def get_openai_like_model(base_url: str, api_key: Optional[str], model: str) -> BaseChatModel:
    """Create a chat model against any OpenAI-compatible endpoint.

    Args:
        base_url: API root, e.g. ``http://localhost:1234/v1``.
        api_key: API key; ``None`` leaves the SDK to its own lookup.
        model: Model identifier.

    Returns:
        A configured ``ChatOpenAI`` instance.
    """
    return ChatOpenAI(base_url=base_url, api_key=api_key, model=model)
