"""LLM package exports.

Exposes:
- `LLMManager`: model lists, caching flow and model handles
- `ProviderRegistry`, `build_default_registry`: provider selection
- `BaseProvider`, `get_openai_like_model`: provider interface and helper
- Value types: `ModelInfo`, `ProviderConfig`, `ProviderSetting`,
  `ResolutionInputs`, `ResolvedEndpoint`
"""

from .manager import LLMManager
from .providers import BaseProvider, get_openai_like_model
from .registry import ProviderRegistry, build_default_registry
from .types import (
    ModelInfo,
    ProviderConfig,
    ProviderSetting,
    ResolutionInputs,
    ResolvedEndpoint,
)

__all__ = [
    "LLMManager",
    "ProviderRegistry",
    "build_default_registry",
    "BaseProvider",
    "get_openai_like_model",
    "ModelInfo",
    "ProviderConfig",
    "ProviderSetting",
    "ResolutionInputs",
    "ResolvedEndpoint",
]
