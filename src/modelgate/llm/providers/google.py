"""Google Generative AI (Gemini) provider.

``langchain-google-genai`` is imported lazily; if it is missing, a clear
``ImportError`` is raised when a model handle is requested.
"""

from typing import Dict, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs
from .base import BaseProvider

try:
    from langchain_google_genai import ChatGoogleGenerativeAI

    HAS_GOOGLE = True
except ImportError:
    HAS_GOOGLE = False
    ChatGoogleGenerativeAI = None


class GoogleProvider(BaseProvider):
    """Google Generative AI (Gemini) provider implementation."""

    name = "Google"
    config = ProviderConfig(api_token_key="GOOGLE_GENERATIVE_AI_API_KEY")
    static_models = [
        ModelInfo(
            name="gemini-1.5-pro", label="Gemini 1.5 Pro", provider="Google", max_token_allowed=8192
        ),
        ModelInfo(
            name="gemini-1.5-flash",
            label="Gemini 1.5 Flash",
            provider="Google",
            max_token_allowed=8192,
        ),
    ]
    get_api_key_link = "https://aistudio.google.com/app/apikey"

    def create_model_handle(
        self,
        model: str,
        server_env: Optional[Dict[str, str]] = None,
        api_keys: Optional[Dict[str, str]] = None,
        provider_settings: Optional[Dict[str, ProviderSetting]] = None,
    ) -> BaseChatModel:
        """Create a Google Generative AI (Gemini) chat model.

        Raises:
            ImportError: If ``langchain-google-genai`` is not installed.
        """
        if not HAS_GOOGLE:
            raise ImportError(
                "langchain-google-genai is not installed. Install with: pip install langchain-google-genai"
            )

        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        return ChatGoogleGenerativeAI(model=model, google_api_key=endpoint.api_key)
