"""Caching implementations for the Barcode Lookup Proxy."""

from barcode_proxy.infrastructure.cache.memory_cache import MemoryCache

__all__ = ["MemoryCache"]
