import asyncio
from typing import Callable, Dict

import httpx
import pytest

from app.adapters.implementations import BrasilAPIProvider, ViaCEPProvider

BRASILAPI_HOST = "brasilapi.com.br"
VIACEP_HOST = "viacep.com.br"

BRASILAPI_PAYLOAD = {
    "cep": "01310-100",
    "state": "SP",
    "city": "São Paulo",
    "neighborhood": "Bela Vista",
    "street": "Av. Paulista",
    "service": "open-cep",
}

VIACEP_PAYLOAD = {
    "cep": "01310-100",
    "logradouro": "Avenida Paulista",
    "complemento": "de 612 a 1510 - lado par",
    "bairro": "Bela Vista",
    "localidade": "São Paulo",
    "uf": "SP",
    "ddd": "11",
}


class FakeUpstream:
    """
    Scripted stand-in for the provider hosts, served through httpx.MockTransport.

    Each host gets a delay and a response factory. Calls and cancellations
    are recorded per host.
    """

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.delays: Dict[str, float] = {}
        self.calls: Dict[str, int] = {}
        self.cancelled: Dict[str, bool] = {}

    def route(
        self,
        host: str,
        response: Callable[[httpx.Request], httpx.Response],
        delay: float = 0.0,
    ) -> None:
        self.routes[host] = response
        self.delays[host] = delay

    def json(self, host: str, payload, status_code: int = 200, delay: float = 0.0) -> None:
        self.route(host, lambda request: httpx.Response(status_code, json=payload), delay)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.calls[host] = self.calls.get(host, 0) + 1
        try:
            if self.delays.get(host):
                await asyncio.sleep(self.delays[host])
        except asyncio.CancelledError:
            self.cancelled[host] = True
            raise
        return self.routes[host](request)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_providers() -> Callable[..., list]:
    def _make(brasilapi_timeout: float = 1.0, viacep_timeout: float = 1.0) -> list:
        return [
            BrasilAPIProvider(timeout=brasilapi_timeout),
            ViaCEPProvider(timeout=viacep_timeout),
        ]

    return _make
