"""
BrasilAPI address provider.

Reference: https://brasilapi.com.br/docs#tag/CEP
"""

from typing import Optional

from pydantic import Field

from app.adapters.interfaces.external_api import AddressProvider
from app.adapters.interfaces.normalizer import AddressPayload
from app.domain.models.address import NormalizedAddress


class BrasilAPIResponse(AddressPayload):
    """Body of ``GET /api/cep/v1/{cep}``."""

    SOURCE = "BrasilAPI"

    cep: str = Field(min_length=1)
    state: str = Field(min_length=1)
    city: str = Field(min_length=1)
    neighborhood: Optional[str] = None
    street: Optional[str] = None
    service: Optional[str] = None

    def normalize(self) -> NormalizedAddress:
        return NormalizedAddress(
            postal_code=self.cep,
            city=self.city,
            state=self.state,
            street=self.street or "",
            neighborhood=self.neighborhood or "",
            source=self.SOURCE,
        )


class BrasilAPIProvider(AddressProvider):
    NAME = "brasilapi"
    DEFAULT_URL_TEMPLATE = "https://brasilapi.com.br/api/cep/v1/{postal_code}"
    PAYLOAD_MODEL = BrasilAPIResponse
