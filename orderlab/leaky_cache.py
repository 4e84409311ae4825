"""A key/value cache whose entries expire after a time to live."""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Callable


class CacheNoValueError(LookupError):
    """Raised when a key has no value in the cache."""

    def __init__(self, key: str) -> None:
        super().__init__("value not found by key")
        self.key = key


class LeakyCache:
    """Stores byte values by key; each entry disappears ``ttl`` seconds after it is set."""

    def __init__(
        self,
        size: int = 0,
        ttl: float = 600.0,
        *,
        max_delay: float = 0.05,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_delay = max_delay
        self._clock = clock
        self._storage: dict[str, tuple[bytes, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, after a short simulated delay."""
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("value type is not defined")
        if self._max_delay > 0:
            time.sleep(random.uniform(0, self._max_delay))
        with self._lock:
            self._storage[key] = (bytes(value), self._clock())

    def get(self, key: str) -> bytes:
        """Return the value for ``key``; raise :class:`CacheNoValueError` if absent or expired."""
        with self._lock:
            entry = self._storage.get(key)
            if entry is None:
                raise CacheNoValueError(key)
            value, stored_at = entry
            if self._clock() - stored_at > self._ttl:
                del self._storage[key]
                raise CacheNoValueError(key)
            return value

    def close(self) -> None:
        """Release the cache by dropping every stored entry."""
        with self._lock:
            self._storage.clear()

    def __enter__(self) -> LeakyCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()