"""API routes."""

from barcode_proxy.api.routes.health import health_router
from barcode_proxy.api.routes.lookup import lookup_router

__all__ = ["health_router", "lookup_router"]
