from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from barcode_proxy.api.error_handlers import (
    CORS_HEADERS,
    handle_api_exception,
    handle_http_exception,
    handle_unexpected_exception,
    handle_validation_exception,
)
from barcode_proxy.core.config import Settings, get_settings, load_env_file
from barcode_proxy.core.exceptions import APIException
from barcode_proxy.core.logging import configure_logging, get_logger, set_correlation_id
from barcode_proxy.services.lookup_service import BarcodeLookupService, create_lookup_service


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    lookup_service: Optional[BarcodeLookupService] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        lookup_service: Prebuilt lookup service, mainly for tests

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting up Barcode Lookup Proxy "
            f"(primary={settings.PRIMARY_PROVIDER}, secondary={settings.SECONDARY_PROVIDER})"
        )
        yield
        logger.info("Shutting down Barcode Lookup Proxy")
        await app.state.lookup_service.aclose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.lookup_service = lookup_service or create_lookup_service(settings)

    configure_middleware(app)
    handle_exceptions(app)
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware components for the FastAPI application.

    One HTTP middleware tags each request with a correlation id, adds the
    CORS headers every response carries and logs timing. There is no
    CORSMiddleware: preflights for `/` are answered by the lookup router.

    Args:
        app: FastAPI application instance
    """
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
                extra={
                    "data": {
                        "request_path": request.url.path,
                        "method": request.method,
                        "process_time_ms": round(process_time * 1000, 2),
                    }
                },
                exc_info=True
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id
        for header, value in CORS_HEADERS.items():
            response.headers.setdefault(header, value)

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2),
                }
            }
        )
        return response


def handle_exceptions(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from barcode_proxy.api.routes.health import health_router
    from barcode_proxy.api.routes.lookup import lookup_router

    app.include_router(lookup_router, tags=["Lookup"])
    app.include_router(
        health_router,
        prefix=f"{settings.API_V1_STR}/health",
        tags=["Health"]
    )


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("barcode_proxy.main:app", host="0.0.0.0", port=8000, reload=True)
