import logging
from typing import Dict, List, Optional, Sequence

from app.adapters.implementations import PROVIDER_IMPLEMENTATIONS
from app.adapters.interfaces.external_api import AddressProvider
from app.adapters.registry import ProviderRegistry
from app.core.config import Settings
from app.core.exceptions import ProviderNotFoundError

logger = logging.getLogger(__name__)


def default_registry() -> ProviderRegistry:
    """Returns a registry with every bundled provider registered."""
    registry = ProviderRegistry()
    for name, provider_class in PROVIDER_IMPLEMENTATIONS.items():
        registry.register(name, provider_class)
    return registry


class ProviderFactory:
    """
    Factory for creating configured provider instances.

    Uses a registry to instantiate the providers named in the settings.
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or default_registry()

    def create_provider(
        self,
        name: str,
        timeout: float,
        url_template: Optional[str] = None,
    ) -> AddressProvider:
        """
        Create a provider instance.

        Args:
            name: Registered provider name (e.g., 'brasilapi', 'viacep')
            timeout: Per attempt timeout in seconds
            url_template: Optional override of the provider URL template

        Returns:
            An instance of the requested provider

        Raises:
            ProviderNotFoundError: If the provider is not registered
        """
        provider_class = self.registry.get(name)
        if not provider_class:
            raise ProviderNotFoundError(name, self.registry.list())

        provider = provider_class(url_template=url_template, timeout=timeout)
        logger.info(f"Created {name} provider ({provider.url_template}, timeout={timeout}s)")
        return provider

    def create_providers(self, names: Sequence[str], timeout: float, url_templates: Optional[Dict[str, str]] = None) -> List[AddressProvider]:
        url_templates = url_templates or {}
        return [self.create_provider(name, timeout, url_templates.get(name)) for name in names]

    def from_settings(self, settings: Settings) -> List[AddressProvider]:
        """Builds the providers enabled in the application settings."""
        return self.create_providers(
            settings.ENABLED_PROVIDERS,
            timeout=settings.PROVIDER_TIMEOUT,
            url_templates={
                "brasilapi": settings.BRASILAPI_URL_TEMPLATE,
                "viacep": settings.VIACEP_URL_TEMPLATE,
            },
        )

    def get_provider_names(self) -> List[str]:
        return self.registry.list()
