"""
Interfaces package for the CEP Service.

Abstract bases every address provider and provider payload implements.
"""

from .normalizer import AddressPayload
from .external_api import AddressProvider

__all__ = [
    'AddressPayload',
    'AddressProvider',
]
