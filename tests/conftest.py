"""Shared fixtures: environment isolation and a scriptable provider."""

from typing import Dict, List, Optional

import pytest

from modelgate.config.environment import EnvironmentSnapshot
from modelgate.config.settings import Settings
from modelgate.llm.providers.base import BaseProvider, get_openai_like_model
from modelgate.llm.types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs

PROVIDER_ENV_VARS = [
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_GENERATIVE_AI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_LIKE_API_BASE_URL",
    "OPENAI_LIKE_API_KEY",
    "OLLAMA_API_BASE_URL",
    "STUB_BASE_URL",
]


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Keep the developer's real credentials out of resolution."""
    for var in PROVIDER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class StubProvider(BaseProvider):
    """Provider whose discovery returns canned models or raises."""

    name = "openai"
    config = ProviderConfig(
        base_url="https://default",
        base_url_key="STUB_BASE_URL",
        api_token_key="OPENAI_API_KEY",
    )
    static_models = [ModelInfo(name="stub-static", label="Stub Static", provider="openai")]
    supports_dynamic_models = True

    def __init__(self, *args, models: Optional[List[ModelInfo]] = None, error=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.models = models if models is not None else [
            ModelInfo(name="stub-dynamic", label="Stub Dynamic", provider="openai")
        ]
        self.error = error
        self.fetch_calls = 0

    async def fetch_dynamic_models(
        self,
        api_keys: Optional[Dict[str, str]] = None,
        settings: Optional[ProviderSetting] = None,
        server_env: Optional[Dict[str, str]] = None,
    ) -> List[ModelInfo]:
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.models)

    def create_model_handle(self, model, server_env=None, api_keys=None, provider_settings=None):
        endpoint = self.resolve_endpoint(
            ResolutionInputs(
                api_keys=api_keys or {},
                provider_settings=provider_settings or {},
                server_env=server_env or {},
            )
        )
        return get_openai_like_model(endpoint.base_url, endpoint.api_key or "sk-test", model)


class StaticOnlyProvider(StubProvider):
    name = "static"
    config = ProviderConfig(api_token_key="STATIC_API_KEY")
    static_models = [ModelInfo(name="static-1", label="Static 1", provider="static")]
    supports_dynamic_models = False


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def environment():
    return EnvironmentSnapshot()


@pytest.fixture
def stub_provider(environment):
    return StubProvider(environment=environment)
