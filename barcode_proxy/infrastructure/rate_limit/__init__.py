"""Outbound rate limiting."""

from barcode_proxy.infrastructure.rate_limit.limiter import RateLimiter

__all__ = ["RateLimiter"]
