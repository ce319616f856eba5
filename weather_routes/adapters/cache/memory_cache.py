"""In-memory cache for solved route networks.

Each entry holds a full all-pairs solution (two ``N x N`` matrices), so
the cache is bounded: when full, the oldest entry is evicted first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """Bounded FIFO cache implementing CachePort.

    Attributes:
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging

    Example:
        cache = InMemoryCache[AllPairsSolution](name="solutions", max_size=4)
        solution = cache.get_or_compute("storm@12", lambda: solver.solve(g, storm))
    """

    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Any] = field(default_factory=dict, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, key: str) -> Optional[T]:
        value = self._store.get(key)
        if value is None:
            self._misses += 1
            return None
        self._hits += 1
        return value

    def set(self, key: str, value: T) -> None:
        if (
            self.max_size is not None
            and key not in self._store
            and len(self._store) >= self.max_size
        ):
            oldest_key = next(iter(self._store))
            del self._store[oldest_key]
            self._logger.debug(
                "Cache evicted entry",
                extra={"key": oldest_key, "reason": "max_size"},
            )

        self._store[key] = value
        self._logger.debug("Cache entry set", extra={"key": key})

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value."""
        value = self.get(key)
        if value is not None:
            self._logger.debug("Cache hit", extra={"key": key})
            return value

        self._logger.debug("Cache miss, computing", extra={"key": key})
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        count = len(self._store)
        self._store.clear()
        if count:
            self._logger.debug("Cache cleared", extra={"entries_cleared": count})
        return count

    def size(self) -> int:
        return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counts and size."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "size": len(self._store),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 1),
        }
