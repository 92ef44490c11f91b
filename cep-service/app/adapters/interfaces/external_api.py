from abc import ABC
from typing import Any, ClassVar, Optional, Type
from urllib.parse import quote
import asyncio
import time

import httpx
from pydantic import ValidationError

from app.adapters.interfaces.normalizer import AddressPayload
from app.core.exceptions import (
    ProviderDecodeError,
    ProviderError,
    ProviderRequestError,
    ProviderResponseError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from app.core.logging import get_logger
from app.domain.models.address import NormalizedAddress

logger = get_logger(__name__)


class AddressProvider(ABC):
    """
    Abstract base for external address lookup providers.

    A provider performs exactly one GET against its URL template with the
    postal code substituted in, bounded by a hard timeout covering connect,
    read and decode. There are no retries: any failure is logged and raised
    as a ProviderError so the caller can drop this provider from the race.

    Subclasses only declare their name, default URL template and payload
    model; the request/decode/normalize flow lives here.

    Class Attributes:
        NAME: Registry name of the provider
        DEFAULT_URL_TEMPLATE: URL with a ``{postal_code}`` placeholder
        PAYLOAD_MODEL: AddressPayload subclass the JSON body decodes into
    """

    NAME: ClassVar[str] = ""
    DEFAULT_URL_TEMPLATE: ClassVar[str] = ""
    PAYLOAD_MODEL: ClassVar[Type[AddressPayload]]

    def __init__(self, url_template: Optional[str] = None, timeout: float = 1.0):
        """
        Initialize the provider.

        Args:
            url_template: Overrides DEFAULT_URL_TEMPLATE when given
            timeout: Hard limit in seconds for one whole attempt
        """
        self.url_template = url_template or self.DEFAULT_URL_TEMPLATE
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.NAME

    def build_url(self, postal_code: str) -> str:
        """
        Substitutes the postal code into the URL template.

        Raises:
            ProviderRequestError: If the template cannot be rendered
        """
        try:
            return self.url_template.format(postal_code=quote(postal_code, safe=""))
        except (KeyError, IndexError, ValueError) as e:
            raise ProviderRequestError(self.name, f"invalid URL template '{self.url_template}'", e)

    def build_request(self, client: httpx.AsyncClient, postal_code: str) -> httpx.Request:
        url = self.build_url(postal_code)
        try:
            return client.build_request(
                "GET",
                url,
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise ProviderRequestError(self.name, f"invalid request URL '{url}'", e)

    async def fetch(self, client: httpx.AsyncClient, postal_code: str) -> Any:
        """
        Sends the request and returns the parsed JSON body.

        Raises:
            ProviderRequestError: If the request cannot be built or sent
            ProviderTimeoutError: On connect or read timeout
            ProviderTransportError: On any other network failure
            ProviderResponseError: On a non-2xx status
            ProviderDecodeError: If the body is not JSON
        """
        request = self.build_request(client, postal_code)

        try:
            response = await client.send(request)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(self.name, f"timed out after {self.timeout}s", e)
        except httpx.UnsupportedProtocol as e:
            raise ProviderRequestError(self.name, f"unsupported URL '{request.url}'", e)
        except httpx.RequestError as e:
            raise ProviderTransportError(self.name, f"request failed: {e}", e)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderResponseError(self.name, response.status_code, e)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderDecodeError(self.name, "response body is not valid JSON", e)

    def decode(self, data: Any) -> AddressPayload:
        """
        Validates raw JSON against the provider schema.

        Raises:
            ProviderDecodeError: If the payload does not match PAYLOAD_MODEL
        """
        try:
            return self.PAYLOAD_MODEL.model_validate(data)
        except ValidationError as e:
            raise ProviderDecodeError(self.name, f"unexpected payload: {e.error_count()} validation error(s)", e)

    async def _lookup(self, client: httpx.AsyncClient, postal_code: str) -> NormalizedAddress:
        data = await self.fetch(client, postal_code)
        return self.decode(data).normalize()

    async def lookup(self, client: httpx.AsyncClient, postal_code: str) -> NormalizedAddress:
        """
        Resolves a postal code through this provider.

        Args:
            client: Shared HTTP client for the current request
            postal_code: Postal code to resolve

        Returns:
            NormalizedAddress: The normalized address tagged with this provider

        Raises:
            ProviderError: On any failure; already logged
        """
        start_time = time.perf_counter()
        try:
            address = await asyncio.wait_for(self._lookup(client, postal_code), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            error = ProviderTimeoutError(self.name, f"timed out after {self.timeout}s", e)
            self._log_failure(postal_code, error, start_time)
            raise error
        except ProviderError as e:
            self._log_failure(postal_code, e, start_time)
            raise

        logger.debug(
            f"{self.name} resolved postal code {postal_code}",
            extra={"data": {
                "provider": self.name,
                "postal_code": postal_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }}
        )
        return address

    def _log_failure(self, postal_code: str, error: ProviderError, start_time: float) -> None:
        logger.warning(
            f"Error while querying {self.name} for postal code {postal_code}. Err:{error.message}",
            extra={"data": {
                "provider": self.name,
                "postal_code": postal_code,
                "error_type": type(error).__name__,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }}
        )
