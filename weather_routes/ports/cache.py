"""Cache port - Injectable caching abstraction.

The route network service keeps solved all-pairs instances in a cache
keyed by regime and graph version, so switching back and forth between
regimes does not re-run the solver until the graph changes.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Caching disabled
    """

    def get(self, key: str) -> Optional[T]:
        """Get a value from the cache, or None if absent."""
        ...

    def set(self, key: str, value: T) -> None:
        """Store a value under ``key``."""
        ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...
