"""
Domain models package for the CEP Service.

Domain models are persistence-agnostic and carry no knowledge of the
providers that produced them.
"""

from app.domain.models.address import NormalizedAddress
from app.domain.models.lookup import LookupResult

__all__ = ["NormalizedAddress", "LookupResult"]
