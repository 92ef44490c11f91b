"""
Adapters package for the CEP Service.

This package contains components for integrating with the external CEP
providers, including:
- Abstract interfaces for providers and their payloads
- Concrete implementations for BrasilAPI and ViaCEP
- Factory and registry for building the configured providers
"""

from . import interfaces

from .factory import ProviderFactory, default_registry
from .registry import ProviderRegistry

__all__ = [
    'interfaces',
    'ProviderFactory',
    'ProviderRegistry',
    'default_registry',
]
