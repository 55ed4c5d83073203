"""Infrastructure layer for the Barcode Lookup Proxy."""

from barcode_proxy.infrastructure.cache import MemoryCache
from barcode_proxy.infrastructure.rate_limit import RateLimiter
