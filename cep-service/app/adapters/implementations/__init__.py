"""
Address provider implementations.

Each module wraps one external CEP lookup service.
"""

from app.adapters.implementations.brasilapi import BrasilAPIProvider, BrasilAPIResponse
from app.adapters.implementations.viacep import ViaCEPProvider, ViaCEPResponse

# Mapping of provider names to their implementation classes
PROVIDER_IMPLEMENTATIONS = {
    BrasilAPIProvider.NAME: BrasilAPIProvider,
    ViaCEPProvider.NAME: ViaCEPProvider,
}

__all__ = [
    "BrasilAPIProvider",
    "BrasilAPIResponse",
    "ViaCEPProvider",
    "ViaCEPResponse",
    "PROVIDER_IMPLEMENTATIONS",
]
