import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from barcode_proxy.adapters.factory import ProviderFactory
from barcode_proxy.adapters.implementations import HttpxConnector, ProductNormalizer
from barcode_proxy.adapters.interfaces.cache import CacheStrategy
from barcode_proxy.adapters.interfaces.connector import APIConnector
from barcode_proxy.adapters.interfaces.normalizer import DataNormalizer
from barcode_proxy.adapters.interfaces.provider import ProviderClient
from barcode_proxy.core.config import Settings
from barcode_proxy.core.exceptions import (
    AggregateLookupError,
    BadRequestError,
    LookupCancelledError,
    ProviderError,
)
from barcode_proxy.core.logging import get_logger, set_current_barcode
from barcode_proxy.domain.models.product import Product, unknown_product
from barcode_proxy.domain.models.records import ProviderVariant, is_no_product
from barcode_proxy.infrastructure.cache import MemoryCache
from barcode_proxy.infrastructure.error import ErrorHandler
from barcode_proxy.infrastructure.rate_limit import RateLimiter

logger = get_logger(__name__)


class LookupSource(str, Enum):
    """Where a lookup result came from."""
    CACHE = "cache"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    PLACEHOLDER = "placeholder"


@dataclass
class LookupResult:
    """A resolved product and the stage that produced it."""
    product: Product
    source: LookupSource


class BarcodeLookupService:
    """
    Resolves barcodes to canonical products.

    A lookup goes through the cache, then the rate limiter, then the primary
    provider and, if that fails, the secondary provider. Both failing raises
    ``AggregateLookupError`` carrying both provider errors.

    Products from the secondary provider are always cached. Products from the
    primary provider are cached only when ``cache_on_fallback_only`` is false.
    The "Unknown Product" placeholder is never cached.
    """

    def __init__(
        self,
        primary: ProviderClient,
        secondary: ProviderClient,
        cache: CacheStrategy,
        rate_limiter: RateLimiter,
        normalizer: Optional[DataNormalizer] = None,
        error_handler: Optional[ErrorHandler] = None,
        cache_on_fallback_only: bool = True,
        deadline: Optional[float] = None,
        connector: Optional[APIConnector] = None
    ):
        """
        Initialize with injected collaborators.

        Args:
            primary: Provider tried first
            secondary: Provider tried when the primary fails
            cache: Cache of barcode to Product
            rate_limiter: Throttle applied once per lookup reaching the network
            normalizer: Maps provider records to Product
            error_handler: Categorizes and logs provider failures
            cache_on_fallback_only: Skip caching primary results when true
            deadline: Default seconds allowed for the network stage, None for no limit
            connector: HTTP connector owned by this service, closed by ``aclose``
        """
        self.primary = primary
        self.secondary = secondary
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.normalizer = normalizer or ProductNormalizer()
        self.error_handler = error_handler or ErrorHandler(logger)
        self.cache_on_fallback_only = cache_on_fallback_only
        self.deadline = deadline
        self._connector = connector

    async def lookup(self, barcode: str, timeout: Optional[float] = None) -> LookupResult:
        """
        Look a barcode up.

        Args:
            barcode: Non-empty barcode string, used verbatim
            timeout: Seconds allowed for the rate-limit wait and provider
                calls; falls back to the service deadline

        Returns:
            LookupResult: The product and where it came from

        Raises:
            BadRequestError: If the barcode is missing or empty
            AggregateLookupError: If both providers failed
            LookupCancelledError: If the deadline passed first
        """
        if not isinstance(barcode, str) or not barcode.strip():
            raise BadRequestError()

        set_current_barcode(barcode)

        cached = await self._cache_get(barcode)
        if cached is not None:
            logger.info(f"Returning cached data for: {barcode}")
            return LookupResult(product=cached, source=LookupSource.CACHE)

        deadline = timeout if timeout is not None else self.deadline
        if deadline is None:
            return await self._resolve(barcode)

        try:
            return await asyncio.wait_for(self._resolve(barcode), deadline)
        except asyncio.TimeoutError:
            logger.warning(f"Lookup for {barcode} exceeded its {deadline:g}s deadline")
            raise LookupCancelledError(barcode, deadline)

    async def _resolve(self, barcode: str) -> LookupResult:
        await self.rate_limiter.acquire()

        try:
            record = await self.primary.lookup(barcode)
        except ProviderError as primary_error:
            self.error_handler.handle_error(
                primary_error,
                source=self.primary.provider_name,
                context={"stage": ProviderVariant.PRIMARY.value},
            )
            logger.info(f"{self.primary.provider_name} failed, trying {self.secondary.provider_name}")
            return await self._fallback(barcode, primary_error)

        if is_no_product(record):
            return LookupResult(product=unknown_product(), source=LookupSource.PLACEHOLDER)

        product = self.normalizer.normalize(record)
        if not self.cache_on_fallback_only:
            await self._cache_put(barcode, product)
        return LookupResult(product=product, source=LookupSource.PRIMARY)

    async def _fallback(self, barcode: str, primary_error: ProviderError) -> LookupResult:
        try:
            record = await self.secondary.lookup(barcode)
        except ProviderError as secondary_error:
            self.error_handler.handle_error(
                secondary_error,
                source=self.secondary.provider_name,
                context={"stage": ProviderVariant.SECONDARY.value},
            )
            raise AggregateLookupError(primary_error, secondary_error) from secondary_error

        if is_no_product(record):
            logger.info(f"{self.secondary.provider_name} has no product for {barcode}")
            return LookupResult(product=unknown_product(), source=LookupSource.PLACEHOLDER)

        product = self.normalizer.normalize(record)
        await self._cache_put(barcode, product)
        return LookupResult(product=product, source=LookupSource.SECONDARY)

    async def _cache_get(self, barcode: str) -> Optional[Product]:
        try:
            cached = await self.cache.get(barcode)
        except Exception:
            logger.warning(f"Cache read failed for {barcode}, treating as miss", exc_info=True)
            return None
        if cached is not None and not isinstance(cached, Product):
            logger.warning(f"Ignoring malformed cache entry for {barcode}")
            return None
        return cached

    async def _cache_put(self, barcode: str, product: Product) -> None:
        try:
            await self.cache.set(barcode, product)
        except Exception:
            logger.warning(f"Cache write failed for {barcode}", exc_info=True)

    async def describe(self) -> Dict[str, Any]:
        """Configuration and state of the lookup chain, for health checks."""
        return {
            "primary": self.primary.get_capabilities(),
            "secondary": self.secondary.get_capabilities(),
            "cache": await self.cache.get_stats(),
            "rate_limiter": self.rate_limiter.get_stats(),
            "cache_on_fallback_only": self.cache_on_fallback_only,
        }

    async def aclose(self) -> None:
        """Release the HTTP connector if this service owns one."""
        if self._connector is not None:
            await self._connector.close()


def create_lookup_service(
    settings: Settings,
    connector: Optional[APIConnector] = None,
    factory: Optional[ProviderFactory] = None
) -> BarcodeLookupService:
    """
    Build a lookup service from settings.

    Args:
        settings: Application settings
        connector: Optional connector; an ``HttpxConnector`` is created otherwise
        factory: Optional provider factory

    Returns:
        BarcodeLookupService: Service with its own cache and rate limiter
    """
    connector = connector or HttpxConnector(timeout=settings.DEFAULT_TIMEOUT)
    factory = factory or ProviderFactory()

    primary = factory.create_provider(
        settings.PRIMARY_PROVIDER, settings, connector, ProviderVariant.PRIMARY
    )
    secondary = factory.create_provider(
        settings.SECONDARY_PROVIDER, settings, connector, ProviderVariant.SECONDARY
    )

    return BarcodeLookupService(
        primary=primary,
        secondary=secondary,
        cache=MemoryCache(
            max_entries=settings.CACHE_MAX_ENTRIES,
            default_ttl=settings.CACHE_TTL,
            value_type=Product,
        ),
        rate_limiter=RateLimiter(min_interval=settings.min_request_interval),
        cache_on_fallback_only=settings.CACHE_ON_FALLBACK_ONLY,
        deadline=settings.lookup_deadline,
        connector=connector,
    )
