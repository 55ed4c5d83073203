import copy
import time
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Type

from barcode_proxy.core.logging import get_logger
from barcode_proxy.adapters.interfaces.cache import CacheStrategy

logger = get_logger(__name__)


class CacheItem:
    """Class representing a cached item with expiration."""

    def __init__(self, value: Any, expires_at: Optional[float] = None):
        """
        Initialize a cache item.

        Args:
            value: Cached value
            expires_at: Expiration timestamp on the cache clock
        """
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        """
        Check if the item has expired.

        Args:
            now: Current time on the cache clock

        Returns:
            True if expired
        """
        if self.expires_at is None:
            return False
        return now >= self.expires_at


class MemoryCache(CacheStrategy[str, Any]):
    """
    In-memory, process-local implementation of the CacheStrategy interface.

    Entries are kept in least-recently-used order. When ``max_entries`` is
    positive the oldest entry is evicted once the bound is exceeded; when
    ``default_ttl`` is positive entries expire that many seconds after being
    set. ``max_entries=0`` with ``default_ttl=0`` keeps every entry for the
    life of the process.

    When ``value_type`` is given, a stored value of any other type is
    dropped on read and reported as a miss.
    """

    def __init__(
        self,
        max_entries: int = 10000,
        default_ttl: int = 0,
        value_type: Optional[Type] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the in-memory cache.

        Args:
            max_entries: Maximum number of entries, 0 for no bound
            default_ttl: Default TTL in seconds, 0 for no expiry
            value_type: Optional type every cached value must have
            clock: Monotonic time source, injectable for tests
        """
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self.value_type = value_type
        self._clock = clock

        self._cache: "OrderedDict[str, CacheItem]" = OrderedDict()
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

        logger.info(
            f"In-memory cache initialized (max_entries={max_entries or 'unbounded'}, "
            f"ttl={default_ttl or 'none'})"
        )

    async def get(self, key: str) -> Any:
        """
        Get item from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found, expired or malformed
        """
        with self._lock:
            item = self._cache.get(key)

            if item is None:
                self._misses += 1
                logger.debug(f"Cache miss for key: {key}")
                return None

            if item.is_expired(self._clock()):
                del self._cache[key]
                self._misses += 1
                logger.debug(f"Cache miss (expired) for key: {key}")
                return None

            if self.value_type is not None and not isinstance(item.value, self.value_type):
                del self._cache[key]
                self._misses += 1
                logger.warning(
                    f"Dropped malformed cache entry for key {key}: "
                    f"expected {self.value_type.__name__}, got {type(item.value).__name__}"
                )
                return None

            self._cache.move_to_end(key)
            self._hits += 1
            logger.debug(f"Cache hit for key: {key}")
            # Return deep copy of value to prevent mutations
            return copy.deepcopy(item.value)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set item in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: TTL in seconds, defaults to the cache's TTL

        Returns:
            True if successful
        """
        effective_ttl = ttl if ttl is not None else self.default_ttl

        expires_at = None
        if effective_ttl > 0:
            expires_at = self._clock() + effective_ttl

        item = CacheItem(
            value=copy.deepcopy(value),
            expires_at=expires_at
        )

        with self._lock:
            self._cache[key] = item
            self._cache.move_to_end(key)
            self._evict_overflow()

        logger.debug(f"Set cache key {key} with TTL {effective_ttl or 'none'}")
        return True

    def _evict_overflow(self) -> None:
        if self.max_entries <= 0:
            return
        while len(self._cache) > self.max_entries:
            evicted_key, _ = self._cache.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted least recently used cache key: {evicted_key}")

    async def invalidate(self, key: str) -> bool:
        """
        Remove item from cache.

        Args:
            key: Cache key

        Returns:
            True if key was found and deleted
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                logger.debug(f"Deleted cache key: {key}")
                return True

            logger.debug(f"Key not found for deletion: {key}")
            return False

    async def exists(self, key: str) -> bool:
        """
        Check if key exists in cache.

        Args:
            key: Cache key

        Returns:
            True if key exists and has not expired
        """
        with self._lock:
            item = self._cache.get(key)
            if item is None:
                return False

            if item.is_expired(self._clock()):
                del self._cache[key]
                return False

            return True

    async def clear(self) -> int:
        """
        Clear all entries.

        Returns:
            Number of keys cleared
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        logger.info(f"Flushed all {count} keys from cache")
        return count

    async def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "backend": "memory",
                "size": len(self._cache),
                "max_entries": self.max_entries,
                "ttl": self.default_ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
