from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel

from app.api.dependencies import get_address_service
from app.core.exceptions import MissingPostalCodeError
from app.core.logging import get_logger
from app.services.address_service import AddressLookupService

# Initialize router and logger
address_router = APIRouter()
logger = get_logger(__name__)


class AddressResponse(BaseModel):
    """Address returned by the provider that won the race."""
    postal_code: str
    city: str
    state: str
    street: str
    neighborhood: str
    source: str
    description: str


@address_router.get(
    "/{cep}",
    response_model=AddressResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve a postal code",
    description="Queries every address provider at once and returns the first answer."
)
async def get_address(
    cep: str = Path(..., description="Brazilian postal code (CEP)"),
    service: AddressLookupService = Depends(get_address_service),
) -> AddressResponse:
    """
    Resolve a CEP to an address.

    Args:
        cep: Postal code from the path
        service: Address lookup service dependency

    Returns:
        AddressResponse: The winning provider's normalized address
    """
    logger.info("Request received on server...")
    try:
        result = await service.lookup(cep)
    finally:
        logger.info("Request finished...")

    logger.info("Request processed successfully")
    logger.info(f"Resultado >>> {result.address.describe()}")

    return AddressResponse(**result.address.to_dict())


@address_router.get("", include_in_schema=False)
@address_router.get("/", include_in_schema=False)
async def get_address_without_postal_code() -> AddressResponse:
    """Rejects a lookup that carries no postal code."""
    raise MissingPostalCodeError()
