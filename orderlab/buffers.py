"""Fixed-size string buffers."""

from __future__ import annotations

import threading
from collections import deque


class RingBuffer:
    """Overwrites slots in a circle, starting from the first slot."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._size = size
        self._index = size
        self._data = [""] * size
        self._lock = threading.Lock()

    def add(self, value: str) -> None:
        with self._lock:
            if self._size == 0:
                return
            self._data[self._index % self._size] = value
            self._index += 1

    def get(self) -> list[str]:
        """Return a copy of the slots in storage order."""
        with self._lock:
            return list(self._data)


class WindowBuffer:
    """Keeps the last ``size`` values, oldest first."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._data: deque[str] = deque([""] * size, maxlen=size)
        self._lock = threading.Lock()

    def add(self, value: str) -> None:
        with self._lock:
            self._data.append(value)

    def get(self) -> list[str]:
        """Return a copy of the window."""
        with self._lock:
            return list(self._data)