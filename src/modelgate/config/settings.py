"""Configuration settings for modelgate.

This module defines a Pydantic ``BaseSettings`` model used to configure the
application via environment variables and a ``.env`` file. Environment
variables are read with the ``MODELGATE_`` prefix (case-insensitive), and field
descriptions serve as the authoritative documentation for each setting.

Provider credentials are not fields here; they are resolved per
provider from request input, the server environment, the process environment
and the startup ``EnvironmentSnapshot`` (see ``config.environment``).
"""

from __future__ import annotations

import logging
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

SUPPORTED_PROVIDERS = (
    "OpenAI",
    "Anthropic",
    "Google",
    "OpenAILike",
    "Ollama",
)

PROVIDER_ALIASES = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "claude": "Anthropic",
    "google": "Google",
    "gemini": "Google",
    "openailike": "OpenAILike",
    "ollama": "Ollama",
}


class Settings(BaseSettings):
    """Application settings with environment variable support and validation.

    Notes:
    - Values can be provided via environment variables with prefix
      ``MODELGATE_`` (e.g., ``MODELGATE_API_PORT=8080``), or from a ``.env``
      file.
    - Configuration is case-insensitive and validates assignments at runtime.
    - See ``model_config`` for environment loading behavior.
    """

    app_name: str = Field(default="modelgate", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    default_provider: str = Field(
        default="OpenAI", description="Provider used when none is requested"
    )
    model_list_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for remote model listing calls",
    )
    env_file: str = Field(
        default=".env",
        description="File captured into the environment snapshot at startup",
    )

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    cors_origins: List[str] = Field(default=["*"], description="CORS allowed origins")

    @field_validator("default_provider")
    @classmethod
    def validate_default_provider(cls, value: str) -> str:
        """Validate and canonicalize the default provider name.

        Args:
            value: Provider name or alias (e.g., "openai", "claude").

        Returns:
            The canonical provider name (e.g., "OpenAI", "Anthropic").

        Raises:
            ValueError: If the provider is not one of the supported options.
        """
        canonical = PROVIDER_ALIASES.get(value.lower())
        if canonical is None:
            raise ValueError(
                f"Unsupported LLM provider: {value}. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return canonical

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the ``logging`` module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    model_config = {
        "env_file": ".env",
        "env_prefix": "MODELGATE_",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore",
    }
