"""FastAPI routes and service wiring for modelgate.

Exposes HTTP endpoints for:

- Listing registered providers and their capabilities (`GET /providers`)
- Listing models of every enabled provider (`POST /models`)
- Listing models of one provider (`POST /models/{provider}`)
- Liveness (`GET /health`)

Model list requests carry API keys and provider settings in the body. Server
variables reach providers through the process environment and the manager's
environment snapshot, never through the request.

Also provides `initialize_api()` to construct the `LLMManager` and wire it
into a shared service container.
"""

from dataclasses import asdict
from typing import Dict, List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..base.loggable import Loggable
from ..config.settings import Settings
from ..llm.manager import LLMManager
from ..llm.types import ModelInfo, ProviderInfo, ResolutionInputs


class ProviderSettingPayload(BaseModel):
    """Per-provider overrides sent by the client."""

    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    enabled: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ModelListRequest(BaseModel):
    """Request payload for the model list endpoints.

    Attributes:
        api_keys: Provider name to API key.
        provider_settings: Provider name to overrides.
    """

    api_keys: Dict[str, str] = Field(default_factory=dict)
    provider_settings: Dict[str, ProviderSettingPayload] = Field(default_factory=dict)

    def to_inputs(self) -> ResolutionInputs:
        return ResolutionInputs(
            api_keys=self.api_keys,
            provider_settings={
                name: setting.model_dump(exclude_none=True)
                for name, setting in self.provider_settings.items()
            },
        )


class ModelInfoResponse(BaseModel):
    """Public information about one model."""

    name: str
    label: str
    provider: str
    max_token_allowed: int

    @classmethod
    def from_model(cls, model: ModelInfo) -> "ModelInfoResponse":
        return cls(**asdict(model))


class ProviderInfoResponse(BaseModel):
    """Public information about a provider.

    Attributes:
        name: Provider name.
        static_models: Models known without contacting the provider.
        supports_dynamic_models: Whether the provider can list models remotely.
        get_api_key_link: Where to obtain credentials, if known.
        label_for_get_api_key: Label for that link, if any.
        icon: Icon reference, if any.
    """

    name: str
    static_models: List[ModelInfoResponse]
    supports_dynamic_models: bool
    get_api_key_link: Optional[str] = None
    label_for_get_api_key: Optional[str] = None
    icon: Optional[str] = None

    @classmethod
    def from_info(cls, info: ProviderInfo) -> "ProviderInfoResponse":
        return cls(
            name=info.name,
            static_models=[ModelInfoResponse.from_model(m) for m in info.static_models],
            supports_dynamic_models=info.supports_dynamic_models,
            get_api_key_link=info.get_api_key_link,
            label_for_get_api_key=info.label_for_get_api_key,
            icon=info.icon,
        )


class APIServiceContainer(Loggable):
    """Container for API services and dependencies.

    Holds the initialized `LLMManager`. Accessors raise HTTP 503 if not
    initialized.
    """

    def __init__(self) -> None:
        super().__init__()
        self.llm_manager: Optional[LLMManager] = None

    def initialize(self, llm_manager: LLMManager) -> None:
        """Initialize all API services.

        Args:
            llm_manager: The process-wide LLM manager.
        """
        self.llm_manager = llm_manager
        self.logger.info("API services initialized")

    def get_llm_manager(self) -> LLMManager:
        """Return the LLM manager or raise HTTP 503 if unavailable."""
        if not self.llm_manager:
            raise HTTPException(status_code=503, detail="LLM manager not initialized")
        return self.llm_manager


# Global service container
service_container = APIServiceContainer()
router = APIRouter(prefix="/api/v1")


def get_llm_manager() -> LLMManager:
    """FastAPI dependency providing the initialized LLM manager."""
    return service_container.get_llm_manager()


@router.get("/providers", response_model=List[ProviderInfoResponse])
async def list_providers(manager: LLMManager = Depends(get_llm_manager)):
    """List registered providers and their capabilities."""
    return [ProviderInfoResponse.from_info(info) for info in manager.get_provider_infos()]


@router.post("/models", response_model=List[ModelInfoResponse])
async def list_models(
    request: ModelListRequest, manager: LLMManager = Depends(get_llm_manager)
):
    """List models of every enabled provider.

    Providers whose discovery fails contribute only their static models.
    """
    models = await manager.update_model_list(request.to_inputs())
    return [ModelInfoResponse.from_model(m) for m in models]


@router.post("/models/{provider_name}", response_model=List[ModelInfoResponse])
async def list_provider_models(
    provider_name: str,
    request: ModelListRequest,
    manager: LLMManager = Depends(get_llm_manager),
):
    """List models of a single provider.

    Raises:
        HTTPException: 404 if the provider is unknown, 502 if the provider's
            model listing call fails.
    """
    if not manager.registry.is_provider_available(provider_name):
        raise HTTPException(status_code=404, detail=f"Provider {provider_name} not found")

    try:
        models = await manager.get_model_list_from_provider(provider_name, request.to_inputs())
    except httpx.HTTPError as e:
        service_container.logger.error(f"Model listing failed for {provider_name}: {e}")
        raise HTTPException(status_code=502, detail=f"Model listing failed: {e}")

    return [ModelInfoResponse.from_model(m) for m in models]


@router.get("/health")
async def health_check():
    """Simple liveness probe for the API service."""
    return {"status": "healthy"}


def initialize_api(settings: Settings, llm_manager: Optional[LLMManager] = None) -> None:
    """Initialize API components and wire services into the container.

    Args:
        settings: Application settings.
        llm_manager: Prebuilt manager; one is constructed from ``settings``
            when omitted.
    """
    manager = llm_manager or LLMManager(settings)
    service_container.initialize(manager)
    service_container.logger.info(
        f"Registered providers: {manager.registry.get_available_providers()}"
    )
