from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

K = TypeVar('K')
V = TypeVar('V')


class CacheStrategy(Generic[K, V], ABC):
    """
    Store of resolved lookups, keyed by the barcode exactly as the caller sent it.

    Implementations hand out copies: mutating a value returned by ``get`` or
    passed to ``set`` never changes what is stored. A value that is expired
    or unreadable is a miss, not an error.
    """

    @abstractmethod
    async def get(self, key: K) -> Optional[V]:
        """Stored value for ``key``, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: K, value: V, ttl: Optional[int] = None) -> bool:
        """
        Store ``value`` under ``key``, replacing any previous entry.

        Args:
            key: Barcode
            value: Value to store
            ttl: Seconds until expiry; None uses the store's default and 0 never expires

        Returns:
            bool: True once stored
        """
        pass

    @abstractmethod
    async def invalidate(self, key: K) -> bool:
        """Drop ``key``; True if it was present."""
        pass

    @abstractmethod
    async def clear(self) -> int:
        """Drop every entry and return how many there were."""
        pass

    @abstractmethod
    async def exists(self, key: K) -> bool:
        """True if ``key`` holds a live entry. Does not count as a hit."""
        pass

    @abstractmethod
    async def get_stats(self) -> Dict[str, Any]:
        """Backend name, size, bounds and hit/miss counters for health checks."""
        pass
