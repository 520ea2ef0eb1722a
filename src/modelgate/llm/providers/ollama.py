"""Ollama provider, served through Ollama's OpenAI-compatible ``/v1`` API."""

from typing import Dict, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs
from .base import BaseProvider, get_openai_like_model

# Ollama ignores the key but the OpenAI client requires one
OLLAMA_PLACEHOLDER_KEY = "ollama"


class OllamaProvider(BaseProvider):
    """Locally served Ollama models."""

    name = "Ollama"
    config = ProviderConfig(
        base_url="http://127.0.0.1:11434",
        base_url_key="OLLAMA_API_BASE_URL",
    )
    supports_dynamic_models = True
    label_for_get_api_key = "Download Ollama"
    get_api_key_link = "https://ollama.com/download"

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        """List locally pulled models from ``GET /api/tags``."""
        endpoint = self.resolve_endpoint(self._discovery_inputs(api_keys, settings, server_env))
        payload = await self._get_json(f"{endpoint.base_url}/api/tags")

        models = []
        for item in payload.get("models", []):
            size = (item.get("details") or {}).get("parameter_size")
            label = f"{item['name']} ({size})" if size else item["name"]
            models.append(
                ModelInfo(name=item["name"], label=label, provider=self.name, max_token_allowed=8000)
            )
        return models

    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        return get_openai_like_model(
            f"{endpoint.base_url}/v1", endpoint.api_key or OLLAMA_PLACEHOLDER_KEY, model
        )
