"""Summing with threads, a lock-guarded map and a deadline-bounded loop."""

from __future__ import annotations

import threading
import time
from collections.abc import Hashable
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, TypeVar

COUNTER = 10_000
DEFAULT_LIMIT = 1_000_000_000

_WORKERS = 8
_CHECK_EVERY = 1024

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def iterate(counter: int = COUNTER) -> int:
    """Sum ``0 .. counter-1`` in the calling thread."""
    return sum(range(counter))


def iterate_threads(counter: int = COUNTER) -> int:
    """Sum ``0 .. counter-1`` with worker threads, each summing its own stripe."""
    stripes = [range(start, counter, _WORKERS) for start in range(_WORKERS)]
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        return sum(pool.map(sum, stripes))


def iterate_locked(counter: int = COUNTER) -> int:
    """Sum ``0 .. counter-1`` with threads adding into one lock-guarded total."""
    total = 0
    lock = threading.Lock()

    def add(value: int) -> None:
        nonlocal total
        with lock:
            total += value

    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        list(pool.map(add, range(counter)))
    return total


class LockedMap(Generic[K, V]):
    """A dict whose reads and writes go through a lock."""

    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: K) -> V | None:
        """Return the stored value, or ``None`` when the key is absent."""
        with self._lock:
            return self._data.get(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class DeadlineExceeded(TimeoutError):
    """Raised when :func:`operate` runs past its deadline."""

    def __init__(self, partial: int) -> None:
        super().__init__("context deadline exceeded")
        self.partial = partial


def operate(deadline: float, limit: int = DEFAULT_LIMIT) -> int:
    """Sum ``0 .. limit-1`` unless ``time.monotonic()`` reaches ``deadline`` first.

    On timeout :class:`DeadlineExceeded` is raised carrying the partial sum.
    """
    out = 0
    for i in range(limit):
        if i % _CHECK_EVERY == 0 and time.monotonic() >= deadline:
            raise DeadlineExceeded(out)
        out += i
    return out