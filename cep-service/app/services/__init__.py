"""
Services package for the CEP Service.

Services orchestrate the address providers on behalf of the HTTP layer and
depend only on the provider abstractions.
"""

from app.services.address_service import AddressLookupService

__all__ = ["AddressLookupService"]
