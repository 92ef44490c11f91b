import pytest

from app.adapters.factory import ProviderFactory, default_registry
from app.adapters.implementations import BrasilAPIProvider, ViaCEPProvider
from app.adapters.registry import ProviderRegistry
from app.core.config import Settings
from app.core.exceptions import ProviderNotFoundError


def test_default_registry_has_bundled_providers():
    registry = default_registry()

    assert registry.list() == ["brasilapi", "viacep"]
    assert registry.get("viacep") is ViaCEPProvider


def test_register_rejects_duplicates():
    registry = ProviderRegistry()
    registry.register("brasilapi", BrasilAPIProvider)

    with pytest.raises(ValueError):
        registry.register("brasilapi", BrasilAPIProvider)


def test_register_rejects_non_providers():
    registry = ProviderRegistry()

    with pytest.raises(ValueError):
        registry.register("dict", dict)

    with pytest.raises(ValueError):
        registry.register("", BrasilAPIProvider)


def test_clear_empties_registry():
    registry = default_registry()
    registry.clear()

    assert registry.list() == []
    assert not registry.is_registered("viacep")


def test_create_unknown_provider():
    factory = ProviderFactory()

    with pytest.raises(ProviderNotFoundError) as excinfo:
        factory.create_provider("correios", timeout=1.0)

    assert excinfo.value.available == ["brasilapi", "viacep"]


def test_from_settings_applies_timeout_and_templates():
    settings = Settings(
        ENABLED_PROVIDERS="viacep",
        PROVIDER_TIMEOUT=0.5,
        VIACEP_URL_TEMPLATE="https://viacep.com.br/ws/{postal_code}/json/",
    )

    providers = ProviderFactory().from_settings(settings)

    assert len(providers) == 1
    assert isinstance(providers[0], ViaCEPProvider)
    assert providers[0].timeout == 0.5
    assert providers[0].url_template == "https://viacep.com.br/ws/{postal_code}/json/"


def test_from_settings_preserves_configured_order():
    settings = Settings(ENABLED_PROVIDERS=["viacep", "brasilapi"])

    providers = ProviderFactory().from_settings(settings)

    assert [p.name for p in providers] == ["viacep", "brasilapi"]
