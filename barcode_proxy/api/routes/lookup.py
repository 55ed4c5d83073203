from fastapi import APIRouter, Depends, Request, Response

from barcode_proxy.api.dependencies import get_app_settings, get_lookup_service
from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import BadRequestError, MethodNotAllowedError
from barcode_proxy.core.logging import get_logger
from barcode_proxy.domain.schemas.requests import LookupRequest
from barcode_proxy.domain.schemas.responses import ErrorResponse, LookupResponse
from barcode_proxy.services.lookup_service import BarcodeLookupService

# Initialize router and logger
lookup_router = APIRouter()
logger = get_logger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Correlation-ID",
    "Access-Control-Max-Age": "86400",
}


@lookup_router.post(
    "/",
    response_model=LookupResponse,
    summary="Look up a barcode",
    responses={
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def lookup_barcode(
    request: Request,
    response: Response,
    lookup_service: BarcodeLookupService = Depends(get_lookup_service),
    settings: Settings = Depends(get_app_settings),
) -> LookupResponse:
    """Resolves ``{"barcode": ...}`` to ``{"products": [product]}``."""
    try:
        payload = await request.json()
    except ValueError:
        raise BadRequestError("Invalid JSON body", status_code=settings.BAD_REQUEST_STATUS_CODE)

    body = LookupRequest.model_validate(payload) if isinstance(payload, dict) else LookupRequest()
    if not body.has_barcode():
        raise BadRequestError(status_code=settings.BAD_REQUEST_STATUS_CODE)

    result = await lookup_service.lookup(body.barcode)
    response.headers["X-Lookup-Source"] = result.source.value
    return LookupResponse.from_product(result.product)


@lookup_router.options("/", include_in_schema=False)
async def lookup_preflight() -> Response:
    """
    Answers every OPTIONS request to `/` with the same preflight headers,
    whatever method or headers the browser asks about.
    """
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


@lookup_router.api_route(
    "/",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def lookup_method_not_allowed() -> None:
    raise MethodNotAllowedError(["POST"])
