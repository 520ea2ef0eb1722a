"""Provider implementations.

Exposes:
- `BaseProvider`, `get_openai_like_model`: provider interface and helper
- Concrete providers for OpenAI, Anthropic, Google, OpenAI-compatible
  endpoints and Ollama
"""

from .anthropic import AnthropicProvider
from .base import BaseProvider, get_openai_like_model
from .google import GoogleProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider
from .openai_like import OpenAILikeProvider

__all__ = [
    "BaseProvider",
    "get_openai_like_model",
    "OpenAIProvider",
    "AnthropicProvider",
    "GoogleProvider",
    "OpenAILikeProvider",
    "OllamaProvider",
]
