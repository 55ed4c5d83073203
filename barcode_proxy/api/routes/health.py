from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import Dict, List, Optional

from barcode_proxy import __version__
from barcode_proxy.api.dependencies import get_lookup_service
from barcode_proxy.core.logging import get_logger
from barcode_proxy.services.lookup_service import BarcodeLookupService

# Initialize router and logger
health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Barcode Lookup Proxy"


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status with dependency information."""
    dependencies: List[DependencyStatus]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(status="ok")


@health_router.get(
    "/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Returns health status of the providers, cache and rate limiter."
)
async def get_detailed_health(
    lookup_service: BarcodeLookupService = Depends(get_lookup_service),
) -> DetailedHealthStatus:
    """
    Detailed health check endpoint with dependency status.

    Provider status is "ok" when its credentials are configured and
    "degraded" otherwise; no outbound call is made.

    Returns:
        DetailedHealthStatus: Service health with dependency status
    """
    logger.debug("Detailed health check requested")
    state = await lookup_service.describe()

    dependencies = []
    for name in ("primary", "secondary"):
        provider = state[name]
        dependencies.append(
            DependencyStatus(
                name=f"{name}_provider",
                status="ok" if provider["status"] == "available" else "degraded",
                details=provider,
            )
        )
    dependencies.append(DependencyStatus(name="cache", status="ok", details=state["cache"]))
    dependencies.append(
        DependencyStatus(name="rate_limiter", status="ok", details=state["rate_limiter"])
    )

    overall = "ok" if all(d.status == "ok" for d in dependencies) else "degraded"
    return DetailedHealthStatus(status=overall, dependencies=dependencies)
