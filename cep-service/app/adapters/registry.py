import logging
from typing import Dict, List, Optional, Type

from app.adapters.interfaces.external_api import AddressProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry of available address provider implementations.

    Maps provider names to their implementing classes.
    """

    def __init__(self):
        self._providers: Dict[str, Type[AddressProvider]] = {}
        logger.debug("Initialized ProviderRegistry")

    def register(self, name: str, provider_class: Type[AddressProvider]) -> None:
        """
        Register a provider implementation.

        Args:
            name: Name the provider is configured by
            provider_class: Class to instantiate for this provider

        Raises:
            ValueError: If the name is invalid or already registered
        """
        if not name or not isinstance(name, str):
            raise ValueError("Provider name must be a non-empty string")

        if not isinstance(provider_class, type) or not issubclass(provider_class, AddressProvider):
            raise ValueError("Provider class must be a subclass of AddressProvider")

        if name in self._providers:
            raise ValueError(f"Provider '{name}' is already registered")

        self._providers[name] = provider_class
        logger.info(f"Registered address provider: {name}")

    def get(self, name: str) -> Optional[Type[AddressProvider]]:
        return self._providers.get(name)

    def list(self) -> List[str]:
        return list(self._providers.keys())

    def is_registered(self, name: str) -> bool:
        return name in self._providers

    def clear(self) -> None:
        """
        Clear all registered providers.
        Primarily used for testing purposes.
        """
        self._providers.clear()
        logger.debug("Cleared all registered providers")
