from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from barcode_proxy.core.exceptions import (
    APIException,
    AggregateLookupError,
    BadRequestError,
    LookupCancelledError,
    MethodNotAllowedError,
)
from barcode_proxy.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": "X-Correlation-ID, X-Lookup-Source",
}


def error_response(status_code: int, content: dict) -> JSONResponse:
    """JSON error response carrying the CORS header every response needs."""
    return JSONResponse(status_code=status_code, content=content, headers=dict(CORS_HEADERS))


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: ``{"error": ...}`` response
    """
    if isinstance(exc, BadRequestError):
        logger.warning(f"Bad request: {exc.detail}")
    elif isinstance(exc, AggregateLookupError):
        logger.error(
            f"Lookup failed: {exc.detail}",
            extra={"data": {"error_code": exc.code, "context": exc.context}}
        )
    elif isinstance(exc, LookupCancelledError):
        logger.warning(f"Lookup cancelled: {exc.detail}")
    else:
        logger.info(f"API Exception: {exc.detail}", extra={"data": {"error_code": exc.code}})

    response = error_response(exc.status_code, exc.to_dict())
    if isinstance(exc, MethodNotAllowedError):
        response.headers["Allow"] = ", ".join(exc.allowed_methods)
    return response


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Render framework HTTP errors (unknown paths and the like) in the same shape.

    A 405 raised by routing, for a method no route declares, gets the same
    body as one raised by a route, listing the methods from the ``Allow``
    header.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        allow = (exc.headers or {}).get("Allow", "")
        allowed = [method.strip() for method in allow.split(",") if method.strip()]
        return await handle_api_exception(request, MethodNotAllowedError(allowed or None))
    return error_response(exc.status_code, {"error": str(exc.detail)})


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors.
    """
    logger.warning(f"Request validation error: {exc.errors()}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"error": "Request validation error"}
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"error": "An unexpected error occurred"}
    )
