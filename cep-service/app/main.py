from contextlib import asynccontextmanager
from typing import Callable
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_exception_handlers
from app.core.config import get_settings, load_env_file
from app.core.logging import configure_logging, get_logger, set_correlation_id


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting server...")
    yield
    logger.info("Server finished...")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    configure_middleware(app)
    register_exception_handlers(app)
    register_routers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                extra={"data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                }},
                exc_info=True
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={"data": {
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }}
        )
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    # Import routers here to avoid circular imports
    from app.api.routes.address import address_router
    from app.api.routes.health import health_router

    app.include_router(
        address_router,
        prefix="/ceps",
        tags=["Addresses"]
    )

    app.include_router(
        health_router,
        prefix=f"{settings.API_V1_STR}/health",
        tags=["Health"]
    )


app = create_application()


def run() -> None:
    """Entry point for the ``cep-service`` console script."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
