"""
ViaCEP address provider.

ViaCEP answers an unknown CEP with HTTP 200 and ``{"erro": true}``, so the
payload model rejects that body instead of producing an empty address.

Reference: https://viacep.com.br/
"""

from typing import Any, Optional

from pydantic import Field, model_validator

from app.adapters.interfaces.external_api import AddressProvider
from app.adapters.interfaces.normalizer import AddressPayload
from app.domain.models.address import NormalizedAddress


class ViaCEPResponse(AddressPayload):
    """Body of ``GET /ws/{cep}/json/``."""

    SOURCE = "ViaCEP"

    cep: str = Field(min_length=1)
    logradouro: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    localidade: str = Field(min_length=1)
    uf: str = Field(min_length=1)
    ddd: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def reject_not_found(cls, data: Any) -> Any:
        if isinstance(data, dict) and str(data.get("erro", "")).lower() == "true":
            raise ValueError("ViaCEP reported the postal code as not found")
        return data

    def normalize(self) -> NormalizedAddress:
        return NormalizedAddress(
            postal_code=self.cep,
            city=self.localidade,
            state=self.uf,
            street=self.logradouro or "",
            neighborhood=self.bairro or "",
            source=self.SOURCE,
        )


class ViaCEPProvider(AddressProvider):
    NAME = "viacep"
    DEFAULT_URL_TEMPLATE = "http://viacep.com.br/ws/{postal_code}/json/"
    PAYLOAD_MODEL = ViaCEPResponse
