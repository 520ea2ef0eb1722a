"""OpenAI provider."""

from typing import Dict, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from ..types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs
from .base import BaseProvider

CHAT_MODEL_PREFIXES = ("gpt-", "o1", "o3", "o4", "chatgpt-")


class OpenAIProvider(BaseProvider):
    """OpenAI chat models via ``langchain-openai``."""

    name = "OpenAI"
    config = ProviderConfig(
        base_url="https://api.openai.com/v1",
        api_token_key="OPENAI_API_KEY",
    )
    static_models = [
        ModelInfo(name="gpt-4o", label="GPT-4o", provider="OpenAI", max_token_allowed=128000),
        ModelInfo(
            name="gpt-4o-mini", label="GPT-4o Mini", provider="OpenAI", max_token_allowed=128000
        ),
    ]
    supports_dynamic_models = True
    get_api_key_link = "https://platform.openai.com/api-keys"

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        """List chat-capable models not already in ``static_models``."""
        endpoint = self.resolve_endpoint(self._discovery_inputs(api_keys, settings, server_env))
        if not endpoint.api_key:
            self.logger.warning(f"No API key for {self.name}; skipping model discovery")
            return []

        payload = await self._get_json(
            f"{endpoint.base_url}/models",
            headers={"Authorization": f"Bearer {endpoint.api_key}"},
        )
        static_names = {m.name for m in self.static_models}

        return [
            ModelInfo(name=item["id"], label=item["id"], provider=self.name, max_token_allowed=32000)
            for item in payload.get("data", [])
            if item["id"].startswith(CHAT_MODEL_PREFIXES) and item["id"] not in static_names
        ]

    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        """Create an OpenAI chat model."""
        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        return ChatOpenAI(model=model, api_key=endpoint.api_key, base_url=endpoint.base_url)
