"""Value objects shared by providers, the registry and the manager."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union


@dataclass(frozen=True)
class ProviderConfig:
    """Static per-provider connection settings.

    Fields:
    - base_url: Default base URL used when no override is found.
    - base_url_key: Name of the env variable overriding the base URL.
    - api_token_key: Name of the env variable holding the API token.
    """

    base_url: Optional[str] = None
    base_url_key: Optional[str] = None
    api_token_key: Optional[str] = None


@dataclass(frozen=True)
class ModelInfo:
    """One selectable model as reported by a provider."""

    name: str
    label: str
    provider: str
    max_token_allowed: int = 8000


@dataclass
class ProviderSetting:
    """Caller-supplied per-provider overrides.

    An empty ``base_url`` is normalized to ``None``. ``enabled=None`` means
    the caller expressed no preference.
    """

    base_url: Optional[str] = None
    enabled: Optional[bool] = None

    def __post_init__(self) -> None:
        if not self.base_url:
            self.base_url = None

    @classmethod
    def coerce(
        cls, value: Union["ProviderSetting", Mapping[str, Any], None]
    ) -> Optional["ProviderSetting"]:
        """Build a setting from a mapping, accepting ``baseUrl`` or ``base_url``."""
        if value is None or isinstance(value, ProviderSetting):
            return value
        return cls(
            base_url=value.get("base_url", value.get("baseUrl")),
            enabled=value.get("enabled"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the non-empty fields as a plain dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ResolutionInputs:
    """Per-call bag of caller-supplied resolution sources.

    Fields:
    - api_keys: Provider name to API key.
    - provider_settings: Provider name to ``ProviderSetting`` (mappings are
      coerced).
    - server_env: Server-side variable name to value.
    """

    api_keys: Dict[str, str] = field(default_factory=dict)
    provider_settings: Dict[str, ProviderSetting] = field(default_factory=dict)
    server_env: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.api_keys = dict(self.api_keys or {})
        self.server_env = dict(self.server_env or {})
        self.provider_settings = {
            name: ProviderSetting.coerce(setting)
            for name, setting in (self.provider_settings or {}).items()
            if setting is not None
        }

    def setting_for(self, provider_name: str) -> Optional[ProviderSetting]:
        return self.provider_settings.get(provider_name)


class ResolvedEndpoint(NamedTuple):
    """Resolved connection parameters; either may be ``None``."""

    base_url: Optional[str]
    api_key: Optional[str]


@dataclass(frozen=True)
class CachedModelSet:
    """Dynamic models cached under the fingerprint that produced them."""

    fingerprint: str
    models: Tuple[ModelInfo, ...]


@dataclass(frozen=True)
class ProviderInfo:
    """Public descriptor of a provider and its capabilities."""

    name: str
    static_models: List[ModelInfo]
    supports_dynamic_models: bool
    get_api_key_link: Optional[str] = None
    label_for_get_api_key: Optional[str] = None
    icon: Optional[str] = None
