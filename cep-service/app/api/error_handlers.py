from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    APIException,
    IntegrationException,
    MissingPostalCodeError,
)
from app.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={"data": {
            "status_code": exc.status_code,
            "error_code": exc.code,
            "context": exc.context
        }}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_missing_postal_code(request: Request, exc: MissingPostalCodeError) -> JSONResponse:
    """Handle lookups requested without a postal code."""
    logger.warning(
        f"Validation error: {exc.detail}",
        extra={"data": {"request_path": request.url.path}}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_integration_exception(request: Request, exc: IntegrationException) -> JSONResponse:
    """
    Handle provider race failures (all failed or timed out).

    Args:
        request: FastAPI request object
        exc: IntegrationException instance

    Returns:
        JSONResponse: Formatted integration error response
    """
    logger.error(
        f"Integration error: {exc.detail}",
        extra={"data": {"error_code": exc.code, "context": exc.context}}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = [
        {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation error",
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "context": {"errors": errors}
            }
        }
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(MissingPostalCodeError, handle_missing_postal_code)
    app.add_exception_handler(IntegrationException, handle_integration_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
