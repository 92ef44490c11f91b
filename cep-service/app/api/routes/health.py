from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import List

from app import __version__
from app.api.dependencies import get_address_service
from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.address_service import AddressLookupService

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "CEP Service"


class ProviderStatus(BaseModel):
    """Configuration of a single address provider."""
    name: str
    url_template: str
    timeout: float


class DetailedHealthStatus(HealthStatus):
    """Detailed health status with provider configuration."""
    lookup_timeout: float
    providers: List[ProviderStatus]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(status="ok", service=get_settings().PROJECT_NAME)


@health_router.get(
    "/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Returns health status including the configured providers."
)
async def get_detailed_health(
    service: AddressLookupService = Depends(get_address_service),
) -> DetailedHealthStatus:
    """
    Detailed health check endpoint.

    Providers are not called here; a lookup is the only way to exercise them.

    Args:
        service: Address lookup service dependency

    Returns:
        DetailedHealthStatus: Service health with provider configuration
    """
    logger.debug("Detailed health check requested")

    providers = [
        ProviderStatus(name=p.name, url_template=p.url_template, timeout=p.timeout)
        for p in service.providers
    ]

    return DetailedHealthStatus(
        status="ok" if providers else "degraded",
        service=get_settings().PROJECT_NAME,
        lookup_timeout=service.lookup_timeout,
        providers=providers
    )
