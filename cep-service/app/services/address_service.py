import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Sequence, Set

import httpx

from app.adapters.interfaces.external_api import AddressProvider
from app.core.exceptions import (
    AllProvidersFailedError,
    LookupTimeoutError,
    MissingPostalCodeError,
    ProviderError,
)
from app.core.logging import get_logger
from app.domain.models.address import NormalizedAddress
from app.domain.models.lookup import LookupResult

logger = get_logger(__name__)


class AddressLookupService:
    """
    Resolves a postal code by racing every configured provider.

    All providers are started at once against the same postal code. The
    first one to produce an address wins; every provider still running at
    that point is cancelled and awaited before the result is returned, so
    no lookup outlives the request. A provider that fails simply drops out.
    If every provider fails, or the overall deadline passes first, a
    defined error is raised instead of waiting forever.
    """

    def __init__(
        self,
        providers: Sequence[AddressProvider],
        lookup_timeout: float = 1.5,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the lookup service.

        Args:
            providers: Providers raced on every lookup
            lookup_timeout: Overall deadline in seconds for one race
            http_client: Shared client to use instead of one per lookup
        """
        self.providers: List[AddressProvider] = list(providers)
        self.lookup_timeout = lookup_timeout
        self.http_client = http_client

    @property
    def provider_names(self) -> List[str]:
        return [provider.name for provider in self.providers]

    async def lookup(self, postal_code: Optional[str]) -> LookupResult:
        """
        Resolves a postal code to the first address any provider returns.

        Args:
            postal_code: Postal code to resolve; only checked for presence

        Returns:
            LookupResult: The winning address and the providers that failed first

        Raises:
            MissingPostalCodeError: If no postal code was given
            AllProvidersFailedError: If every provider failed
            LookupTimeoutError: If the deadline passed without a winner
        """
        postal_code = (postal_code or "").strip()
        if not postal_code:
            raise MissingPostalCodeError()

        if not self.providers:
            raise AllProvidersFailedError(postal_code, {})

        logger.info(f"Looking up postal code {postal_code} with providers {', '.join(self.provider_names)}")

        async with self._client() as client:
            return await self._race(client, postal_code)

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.http_client is not None:
            yield self.http_client
            return

        async with httpx.AsyncClient(follow_redirects=True) as client:
            yield client

    async def _race(self, client: httpx.AsyncClient, postal_code: str) -> LookupResult:
        start_time = time.perf_counter()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.lookup_timeout

        tasks: Dict[asyncio.Task, AddressProvider] = {
            asyncio.create_task(provider.lookup(client, postal_code), name=f"{provider.name}:{postal_code}"): provider
            for provider in self.providers
        }
        pending: Set[asyncio.Task] = set(tasks)
        failures: Dict[str, str] = {}

        try:
            while pending:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break

                done, pending = await asyncio.wait(
                    pending, timeout=remaining, return_when=asyncio.FIRST_COMPLETED
                )

                winners: List[NormalizedAddress] = []
                for task in done:
                    address = self._collect(task, tasks[task], failures)
                    if address is not None:
                        winners.append(address)

                if winners:
                    winner = winners[0]
                    for discarded in winners[1:]:
                        logger.info(f"Discarding {discarded.source} result for {postal_code}, {winner.source} won the race")
                    elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
                    logger.info(
                        f"{winner.source} won the race for postal code {postal_code}",
                        extra={"data": {
                            "postal_code": postal_code,
                            "provider": winner.source,
                            "elapsed_ms": elapsed_ms,
                            "failed_providers": list(failures),
                        }}
                    )
                    return LookupResult(address=winner, elapsed_ms=elapsed_ms, failures=failures)
        finally:
            await self._cancel(pending, tasks)

        if pending:
            logger.error(
                f"Address lookup for {postal_code} timed out after {self.lookup_timeout}s",
                extra={"data": {"postal_code": postal_code, "failures": failures}}
            )
            raise LookupTimeoutError(postal_code, self.lookup_timeout, failures)

        logger.error(
            f"All providers failed for postal code {postal_code}",
            extra={"data": {"postal_code": postal_code, "failures": failures}}
        )
        raise AllProvidersFailedError(postal_code, failures)

    def _collect(
        self,
        task: asyncio.Task,
        provider: AddressProvider,
        failures: Dict[str, str],
    ) -> Optional[NormalizedAddress]:
        """Returns the task's address, or records why the provider dropped out."""
        error = task.exception()
        if error is None:
            return task.result()

        if isinstance(error, ProviderError):
            # Already logged by the provider.
            failures[provider.name] = error.message
        else:
            logger.error(
                f"Unexpected error from provider {provider.name}: {error}",
                exc_info=(type(error), error, error.__traceback__)
            )
            failures[provider.name] = str(error) or type(error).__name__
        return None

    async def _cancel(self, pending: Set[asyncio.Task], tasks: Dict[asyncio.Task, AddressProvider]) -> None:
        if not pending:
            return

        for task in pending:
            logger.debug(f"Cancelling provider {tasks[task].name}")
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
