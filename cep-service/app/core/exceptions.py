from fastapi import status
from typing import Any, Dict, List, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All exceptions that reach the HTTP layer should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


class MissingPostalCodeError(APIException):
    """Raised when a lookup is requested without a postal code."""

    def __init__(self, detail: str = "Postal code is required"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code="missing_postal_code",
            context={"field": "cep"}
        )


class IntegrationException(APIException):
    """Exception raised when the external address providers cannot answer."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)


class AllProvidersFailedError(IntegrationException):
    """Every provider in the race failed before any of them succeeded."""

    def __init__(self, postal_code: str, failures: Dict[str, str]):
        super().__init__(
            detail=f"No provider could resolve postal code '{postal_code}'",
            code="all_providers_failed",
            context={"postal_code": postal_code, "failures": failures}
        )
        self.failures = failures


class LookupTimeoutError(IntegrationException):
    """The race deadline passed before any provider succeeded."""

    def __init__(self, postal_code: str, timeout: float, failures: Optional[Dict[str, str]] = None):
        super().__init__(
            detail=f"Address lookup for postal code '{postal_code}' timed out after {timeout}s",
            code="address_lookup_timeout",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            context={"postal_code": postal_code, "timeout": timeout, "failures": failures or {}}
        )
        self.failures = failures or {}


class ProviderError(Exception):
    """
    Base class for a single provider attempt failing.

    These never reach the HTTP caller directly; the lookup service treats
    them as the provider dropping out of the race.
    """

    def __init__(self, provider: str, message: str, original_exception: Optional[Exception] = None):
        self.provider = provider
        self.message = message
        self.original_exception = original_exception
        super().__init__(f"{provider}: {message}")


class ProviderRequestError(ProviderError):
    """The request could not be built (bad URL template or postal code)."""


class ProviderTransportError(ProviderError):
    """Network level failure talking to the provider."""


class ProviderTimeoutError(ProviderError):
    """The provider did not answer within its timeout."""


class ProviderResponseError(ProviderError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, original_exception: Optional[Exception] = None):
        super().__init__(provider, f"unexpected HTTP status {status_code}", original_exception)
        self.status_code = status_code


class ProviderDecodeError(ProviderError):
    """The provider payload does not match its expected schema."""


class ProviderNotFoundError(ValueError):
    """Raised when an unknown provider name is requested from the registry."""

    def __init__(self, name: str, available: List[str]):
        super().__init__(f"Provider '{name}' is not registered (available: {', '.join(available) or 'none'})")
        self.name = name
        self.available = available
