"""In-process result cache with stale-on-error fallback."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value and the clock reading when it was fetched."""

    value: T
    fetched_at: float


class ResultCache:
    """Keyed, time-boxed memoization shared by report callers.

    A single lock guards the entry map. Fetches run outside the lock, so
    concurrent misses on the same key may each fetch; the last successful
    fetch wins.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache.

        Args:
            ttl_seconds: Default time-to-live applied to every key
            clock: Monotonic clock returning seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_or_fetch(
        self,
        key: str,
        fetch_fn: Callable[[], T],
        ttl: Optional[float] = None,
    ) -> T:
        """Return a cached value, refreshing it with fetch_fn once expired.

        Args:
            key: Report identity
            fetch_fn: Zero-argument callable producing a fresh value
            ttl: Time-to-live override in seconds

        Returns:
            Fresh value, cached value, or the last good value if fetch_fn fails

        Raises:
            Exception: Whatever fetch_fn raised, when no prior value exists
        """
        ttl_seconds = self.ttl_seconds if ttl is None else ttl

        with self._lock:
            cached = self._entries.get(key)

        if cached is not None and self._clock() - cached.fetched_at < ttl_seconds:
            logger.debug("cache_hit", key=key)
            return cached.value

        logger.info("cache_miss", key=key, expired=cached is not None)

        try:
            value = fetch_fn()
        except Exception as e:
            if cached is None:
                logger.error(
                    "cache_fetch_failed",
                    key=key,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            logger.warning(
                "cache_serving_stale",
                key=key,
                age_seconds=round(self._clock() - cached.fetched_at, 1),
                error=str(e),
                error_type=type(e).__name__,
            )
            return cached.value

        with self._lock:
            self._entries[key] = CacheEntry(value=value, fetched_at=self._clock())

        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
