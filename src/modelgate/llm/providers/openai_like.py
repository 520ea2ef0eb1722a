"""Generic OpenAI-compatible provider (LM Studio, vLLM, LocalAI, proxies)."""

from typing import Dict, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs
from .base import BaseProvider, get_openai_like_model


class OpenAILikeProvider(BaseProvider):
    """Any endpoint speaking the OpenAI chat completions protocol.

    There is no default base URL; it must come from settings or
    ``OPENAI_LIKE_API_BASE_URL``.
    """

    name = "OpenAILike"
    config = ProviderConfig(
        base_url_key="OPENAI_LIKE_API_BASE_URL",
        api_token_key="OPENAI_LIKE_API_KEY",
    )
    supports_dynamic_models = True

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        endpoint = self.resolve_endpoint(self._discovery_inputs(api_keys, settings, server_env))
        if not endpoint.base_url or not endpoint.api_key:
            self.logger.warning(
                f"Base URL or API key missing for {self.name}; skipping model discovery"
            )
            return []

        payload = await self._get_json(
            f"{endpoint.base_url}/models",
            headers={"Authorization": f"Bearer {endpoint.api_key}"},
        )
        return [
            ModelInfo(name=item["id"], label=item["id"], provider=self.name, max_token_allowed=8000)
            for item in payload.get("data", [])
        ]

    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        """Create a chat model against the configured endpoint.

        Raises:
            ValueError: If no base URL can be resolved.
        """
        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        if not endpoint.base_url:
            raise ValueError(f"No base URL configured for provider: {self.name}")

        return get_openai_like_model(endpoint.base_url, endpoint.api_key, model)
