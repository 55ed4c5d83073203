from fastapi import Request

from barcode_proxy.core.config import Settings
from barcode_proxy.core.logging import get_logger
from barcode_proxy.services.lookup_service import BarcodeLookupService

# Initialize logger
logger = get_logger(__name__)


async def get_lookup_service(request: Request) -> BarcodeLookupService:
    """
    Dependency for providing the lookup service.

    The service is created once per application and shared by every request,
    so the cache and rate limiter are process-wide.

    Returns:
        BarcodeLookupService: The application's lookup service
    """
    return request.app.state.lookup_service


async def get_app_settings(request: Request) -> Settings:
    """
    Dependency for providing the settings the application was built with.

    Returns:
        Settings: Application settings
    """
    return request.app.state.settings
