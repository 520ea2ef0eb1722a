"""Anthropic (Claude) provider.

``langchain-anthropic`` is imported lazily; if it is missing, a clear
``ImportError`` is raised when a model handle is requested.
"""

from typing import Dict, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs
from .base import BaseProvider

try:
    from langchain_anthropic import ChatAnthropic

    HAS_ANTHROPIC = True
except ImportError:
    HAS_ANTHROPIC = False
    ChatAnthropic = None

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(BaseProvider):
    """Anthropic (Claude) provider implementation."""

    name = "Anthropic"
    config = ProviderConfig(
        base_url="https://api.anthropic.com/v1",
        api_token_key="ANTHROPIC_API_KEY",
    )
    static_models = [
        ModelInfo(
            name="claude-3-5-sonnet-latest",
            label="Claude 3.5 Sonnet",
            provider="Anthropic",
            max_token_allowed=8000,
        ),
        ModelInfo(
            name="claude-3-5-haiku-latest",
            label="Claude 3.5 Haiku",
            provider="Anthropic",
            max_token_allowed=8000,
        ),
    ]
    supports_dynamic_models = True
    get_api_key_link = "https://console.anthropic.com/settings/keys"

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        """List models reported by ``GET /models`` that are not static."""
        endpoint = self.resolve_endpoint(self._discovery_inputs(api_keys, settings, server_env))
        if not endpoint.api_key:
            self.logger.warning(f"No API key for {self.name}; skipping model discovery")
            return []

        payload = await self._get_json(
            f"{endpoint.base_url}/models",
            headers={"x-api-key": endpoint.api_key, "anthropic-version": ANTHROPIC_VERSION},
        )
        static_names = {m.name for m in self.static_models}

        return [
            ModelInfo(
                name=item["id"],
                label=item.get("display_name") or item["id"],
                provider=self.name,
                max_token_allowed=32000,
            )
            for item in payload.get("data", [])
            if item["id"] not in static_names
        ]

    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        """Create an Anthropic (Claude) chat model.

        Raises:
            ImportError: If ``langchain-anthropic`` is not installed.
        """
        if not HAS_ANTHROPIC:
            raise ImportError(
                "langchain-anthropic is not installed. Install with: pip install langchain-anthropic"
            )

        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        # the SDK appends /v1 itself
        base_url = endpoint.base_url
        if base_url and base_url.endswith("/v1"):
            base_url = base_url[: -len("/v1")]

        kwargs = {"base_url": base_url} if base_url else {}
        return ChatAnthropic(model=model, api_key=endpoint.api_key or "", **kwargs)
