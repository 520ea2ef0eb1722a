"""Tests for endpoint resolution, fingerprints and the dynamic model cache."""

import pytest

from conftest import StaticOnlyProvider, StubProvider
from modelgate.config.environment import EnvironmentSnapshot
from modelgate.llm.providers.base import BaseProvider
from modelgate.llm.types import ModelInfo, ProviderConfig, ProviderSetting, ResolutionInputs

MODELS = [
    ModelInfo(name="m-1", label="M 1", provider="openai"),
    ModelInfo(name="m-2", label="M 2", provider="openai"),
]


# ---------------------------------------------------------------------------
# Base URL resolution
# ---------------------------------------------------------------------------


def test_settings_base_url_strips_trailing_slash(stub_provider):
    inputs = ResolutionInputs(provider_settings={"openai": {"baseUrl": "https://x.test/"}})

    assert stub_provider.resolve_endpoint(inputs).base_url == "https://x.test"


def test_static_default_when_no_source_is_set(stub_provider):
    endpoint = stub_provider.resolve_endpoint(ResolutionInputs())

    assert endpoint.base_url == "https://default"
    assert endpoint.api_key is None


def test_settings_base_url_beats_server_env(stub_provider):
    inputs = ResolutionInputs(
        provider_settings={"openai": ProviderSetting(base_url="https://settings.test")},
        server_env={"STUB_BASE_URL": "https://server.test"},
    )

    assert stub_provider.resolve_endpoint(inputs).base_url == "https://settings.test"


def test_empty_settings_base_url_falls_through(stub_provider):
    inputs = ResolutionInputs(
        provider_settings={"openai": {"baseUrl": ""}},
        server_env={"STUB_BASE_URL": "https://server.test/"},
    )

    assert stub_provider.resolve_endpoint(inputs).base_url == "https://server.test"


def test_server_env_beats_process_env(stub_provider, monkeypatch):
    monkeypatch.setenv("STUB_BASE_URL", "https://process.test")
    inputs = ResolutionInputs(server_env={"STUB_BASE_URL": "https://server.test"})

    assert stub_provider.resolve_endpoint(inputs).base_url == "https://server.test"


def test_process_env_beats_snapshot(monkeypatch):
    monkeypatch.setenv("STUB_BASE_URL", "https://process.test")
    provider = StubProvider(
        environment=EnvironmentSnapshot({"STUB_BASE_URL": "https://snapshot.test"})
    )

    assert provider.resolve_endpoint(ResolutionInputs()).base_url == "https://process.test"


def test_snapshot_beats_static_default():
    provider = StubProvider(
        environment=EnvironmentSnapshot({"STUB_BASE_URL": "https://snapshot.test/"})
    )

    assert provider.resolve_endpoint(ResolutionInputs()).base_url == "https://snapshot.test"


def test_default_base_url_key_used_when_config_has_none(monkeypatch):
    class NoKeyProvider(StubProvider):
        config = ProviderConfig(base_url="https://default")

    monkeypatch.setenv("FALLBACK_BASE_URL", "https://fallback.test/")
    provider = NoKeyProvider()

    endpoint = provider.resolve_endpoint(
        ResolutionInputs(), default_base_url_key="FALLBACK_BASE_URL"
    )

    assert endpoint.base_url == "https://fallback.test"


# ---------------------------------------------------------------------------
# API key resolution
# ---------------------------------------------------------------------------


def test_caller_api_key_beats_server_env(stub_provider):
    inputs = ResolutionInputs(
        api_keys={"openai": "sk-A"}, server_env={"OPENAI_API_KEY": "sk-B"}
    )

    assert stub_provider.resolve_endpoint(inputs).api_key == "sk-A"


def test_api_key_precedence_down_the_chain(monkeypatch):
    provider = StubProvider(environment=EnvironmentSnapshot({"OPENAI_API_KEY": "sk-snapshot"}))
    assert provider.resolve_endpoint(ResolutionInputs()).api_key == "sk-snapshot"

    monkeypatch.setenv("OPENAI_API_KEY", "sk-process")
    assert provider.resolve_endpoint(ResolutionInputs()).api_key == "sk-process"

    inputs = ResolutionInputs(server_env={"OPENAI_API_KEY": "sk-server"})
    assert provider.resolve_endpoint(inputs).api_key == "sk-server"


def test_api_key_of_other_provider_is_ignored(stub_provider):
    inputs = ResolutionInputs(api_keys={"Anthropic": "sk-other"})

    assert stub_provider.resolve_endpoint(inputs).api_key is None


def test_empty_api_key_falls_through(stub_provider):
    inputs = ResolutionInputs(api_keys={"openai": ""}, server_env={"OPENAI_API_KEY": "sk-B"})

    assert stub_provider.resolve_endpoint(inputs).api_key == "sk-B"


# ---------------------------------------------------------------------------
# Fingerprint
# ---------------------------------------------------------------------------


def test_fingerprint_is_deterministic(stub_provider):
    first = ResolutionInputs(
        api_keys={"openai": "sk-A"},
        provider_settings={"openai": {"baseUrl": "https://x.test"}},
        server_env={"B": "2", "A": "1"},
    )
    second = ResolutionInputs(
        api_keys={"openai": "sk-A"},
        provider_settings={"openai": ProviderSetting(base_url="https://x.test")},
        server_env={"A": "1", "B": "2"},
    )

    assert stub_provider.compute_fingerprint(first) == stub_provider.compute_fingerprint(second)


def test_fingerprint_ignores_other_providers(stub_provider):
    base = ResolutionInputs(api_keys={"openai": "sk-A", "Anthropic": "sk-1"})
    changed = ResolutionInputs(
        api_keys={"openai": "sk-A", "Anthropic": "sk-2"},
        provider_settings={"Anthropic": {"baseUrl": "https://other.test"}},
    )

    assert stub_provider.compute_fingerprint(base) == stub_provider.compute_fingerprint(changed)


@pytest.mark.parametrize(
    "changed",
    [
        ResolutionInputs(api_keys={"openai": "sk-other"}),
        ResolutionInputs(api_keys={"openai": "sk-A"}, provider_settings={"openai": {"enabled": False}}),
        ResolutionInputs(api_keys={"openai": "sk-A"}, server_env={"UNRELATED": "1"}),
    ],
)
def test_fingerprint_changes_with_own_inputs_and_server_env(stub_provider, changed):
    base = ResolutionInputs(api_keys={"openai": "sk-A"})

    assert stub_provider.compute_fingerprint(base) != stub_provider.compute_fingerprint(changed)


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


def test_cache_starts_empty(stub_provider):
    assert stub_provider.get_cached_models(ResolutionInputs()) is None


def test_store_then_get_returns_models(stub_provider):
    inputs = ResolutionInputs(api_keys={"openai": "sk-A"})
    stub_provider.store_models(inputs, MODELS)

    assert stub_provider.get_cached_models(inputs) == MODELS


def test_mismatch_evicts_and_eviction_is_sticky(stub_provider):
    inputs_a = ResolutionInputs(api_keys={"openai": "sk-A"})
    inputs_b = ResolutionInputs(api_keys={"openai": "sk-B"})
    stub_provider.store_models(inputs_a, MODELS)

    assert stub_provider.get_cached_models(inputs_b) is None
    assert stub_provider.get_cached_models(inputs_a) is None


def test_store_overwrites_previous_cache(stub_provider):
    inputs_a = ResolutionInputs(api_keys={"openai": "sk-A"})
    inputs_b = ResolutionInputs(api_keys={"openai": "sk-B"})
    stub_provider.store_models(inputs_a, MODELS)
    stub_provider.store_models(inputs_b, MODELS[:1])

    assert stub_provider.get_cached_models(inputs_b) == MODELS[:1]


def test_cached_list_is_a_copy(stub_provider):
    inputs = ResolutionInputs()
    stub_provider.store_models(inputs, MODELS)
    stub_provider.get_cached_models(inputs).clear()

    assert stub_provider.get_cached_models(inputs) == MODELS


def test_clear_cache(stub_provider):
    inputs = ResolutionInputs()
    stub_provider.store_models(inputs, MODELS)
    stub_provider.clear_cache()

    assert stub_provider.get_cached_models(inputs) is None


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_base_fetch_raises_without_capability():
    provider = StaticOnlyProvider()

    with pytest.raises(NotImplementedError):
        await BaseProvider.fetch_dynamic_models(provider)


def test_describe_reports_capabilities(stub_provider):
    info = stub_provider.describe()

    assert info.name == "openai"
    assert info.supports_dynamic_models is True
    assert [m.name for m in info.static_models] == ["stub-static"]
