"""Health check endpoints."""

from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...infrastructure.dependencies import ServiceContainer, get_service_container

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    provider: Optional[str]
    provider_available: bool
    providers: Dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    container: ServiceContainer = Depends(get_service_container),
) -> HealthResponse:
    """Check service health and the classifier backend.

    Returns:
        Service status and which providers are ready
    """
    provider = container.provider
    return HealthResponse(
        status="healthy",
        version=VERSION,
        provider=provider.provider_name if provider else None,
        provider_available=bool(provider and provider.is_available),
        providers=container.provider_factory.available_providers,
    )
