import time

import httpx
import pytest

from app.core.exceptions import (
    AllProvidersFailedError,
    LookupTimeoutError,
    MissingPostalCodeError,
)
from app.services.address_service import AddressLookupService
from tests.conftest import BRASILAPI_HOST, BRASILAPI_PAYLOAD, VIACEP_HOST, VIACEP_PAYLOAD

pytestmark = pytest.mark.asyncio


async def test_fastest_provider_wins(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.5)

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        result = await service.lookup("01310-100")

    assert result.provider == "BrasilAPI"
    assert result.address.postal_code == "01310-100"
    assert result.address.city == "São Paulo"
    assert result.address.state == "SP"
    assert result.address.street == "Av. Paulista"
    assert result.address.neighborhood == "Bela Vista"
    assert result.failures == {}


async def test_losing_provider_is_cancelled(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.5)

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        start = time.perf_counter()
        await service.lookup("01310-100")
        elapsed = time.perf_counter() - start

    assert upstream.cancelled.get(VIACEP_HOST) is True
    assert elapsed < 0.4


async def test_failed_provider_drops_out_of_the_race(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, {"message": "internal error"}, status_code=500)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.05)

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        result = await service.lookup("01310-100")

    assert result.provider == "ViaCEP"
    assert list(result.failures) == ["brasilapi"]


async def test_simultaneous_successes_return_one_valid_address(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD)

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        result = await service.lookup("01310-100")

    assert result.provider in {"BrasilAPI", "ViaCEP"}
    assert result.address.postal_code == "01310-100"
    assert result.address.city == "São Paulo"
    assert result.address.state == "SP"
    assert result.address.street


async def test_provider_answering_after_its_timeout_never_wins(upstream, make_providers):
    # BrasilAPI would answer first, but only after its own timeout has expired
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD, delay=0.1)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.2)

    async with upstream.client() as client:
        service = AddressLookupService(
            make_providers(brasilapi_timeout=0.05, viacep_timeout=1.0), http_client=client
        )
        result = await service.lookup("01310-100")

    assert result.provider == "ViaCEP"
    assert "brasilapi" in result.failures


async def test_all_providers_failing_raises_a_defined_error(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, {"message": "CEP não encontrado"}, status_code=404)
    upstream.json(VIACEP_HOST, {"erro": True})

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), lookup_timeout=5.0, http_client=client)
        start = time.perf_counter()
        with pytest.raises(AllProvidersFailedError) as excinfo:
            await service.lookup("00000-000")
        elapsed = time.perf_counter() - start

    assert set(excinfo.value.failures) == {"brasilapi", "viacep"}
    assert excinfo.value.status_code == 502
    assert elapsed < 1.0


async def test_all_providers_timing_out_is_bounded(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD, delay=5)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=5)

    async with upstream.client() as client:
        service = AddressLookupService(
            make_providers(brasilapi_timeout=0.1, viacep_timeout=0.1),
            lookup_timeout=5.0,
            http_client=client,
        )
        start = time.perf_counter()
        with pytest.raises(AllProvidersFailedError):
            await service.lookup("01310-100")
        elapsed = time.perf_counter() - start

    assert elapsed < 1.0


async def test_lookup_deadline_stops_waiting(upstream, make_providers):
    upstream.json(BRASILAPI_HOST, BRASILAPI_PAYLOAD, delay=5)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=5)

    async with upstream.client() as client:
        service = AddressLookupService(
            make_providers(brasilapi_timeout=10, viacep_timeout=10),
            lookup_timeout=0.1,
            http_client=client,
        )
        start = time.perf_counter()
        with pytest.raises(LookupTimeoutError) as excinfo:
            await service.lookup("01310-100")
        elapsed = time.perf_counter() - start

    assert excinfo.value.status_code == 504
    assert elapsed < 1.0
    assert upstream.cancelled == {BRASILAPI_HOST: True, VIACEP_HOST: True}


@pytest.mark.parametrize("postal_code", [None, "", "   "])
async def test_missing_postal_code_invokes_no_provider(upstream, make_providers, postal_code):
    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        with pytest.raises(MissingPostalCodeError):
            await service.lookup(postal_code)

    assert upstream.total_calls == 0


async def test_postal_code_is_stripped(upstream, make_providers):
    seen = []

    def respond(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=BRASILAPI_PAYLOAD)

    upstream.route(BRASILAPI_HOST, respond)
    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.5)

    async with upstream.client() as client:
        service = AddressLookupService(make_providers(), http_client=client)
        await service.lookup(" 01310-100 ")

    assert seen == ["/api/cep/v1/01310-100"]


async def test_no_providers_configured():
    service = AddressLookupService([])

    with pytest.raises(AllProvidersFailedError):
        await service.lookup("01310-100")


async def test_unexpected_provider_error_is_treated_as_a_failure(upstream, make_providers):
    class BrokenProvider:
        name = "broken"

        async def lookup(self, client, postal_code):
            raise RuntimeError("boom")

    upstream.json(VIACEP_HOST, VIACEP_PAYLOAD, delay=0.05)
    providers = [BrokenProvider(), make_providers()[1]]

    async with upstream.client() as client:
        service = AddressLookupService(providers, http_client=client)
        result = await service.lookup("01310-100")

    assert result.provider == "ViaCEP"
    assert result.failures == {"broken": "boom"}
