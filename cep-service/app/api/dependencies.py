from functools import lru_cache

from app.adapters.factory import ProviderFactory
from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.address_service import AddressLookupService

# Initialize logger
logger = get_logger(__name__)


@lru_cache()
def get_provider_factory() -> ProviderFactory:
    """
    Dependency for providing the provider factory.

    Returns:
        ProviderFactory: Factory backed by the bundled provider registry
    """
    return ProviderFactory()


@lru_cache()
def get_address_service() -> AddressLookupService:
    """
    Dependency for providing the address lookup service.

    Providers are built once from the settings; each lookup still gets its
    own HTTP client and its own set of provider tasks.

    Returns:
        AddressLookupService: Service racing the enabled providers
    """
    settings = get_settings()
    providers = get_provider_factory().from_settings(settings)
    logger.info(
        f"Address lookup service ready with providers: {', '.join(p.name for p in providers)}"
    )
    return AddressLookupService(providers, lookup_timeout=settings.LOOKUP_TIMEOUT)
