"""In-memory order stores with different locking strategies."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from .domain import Order


class LockedOrderRepo:
    """Orders by id behind a single mutex."""

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        self._data = {order.id: order for order in orders}
        self._lock = threading.Lock()

    def get(self, order_id: int) -> Order | None:
        with self._lock:
            return self._data.get(order_id)

    def add(self, order: Order) -> None:
        with self._lock:
            self._data[order.id] = order


class _ReadWriteLock:
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writing = False

    @contextmanager
    def reading(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def writing(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ReadWriteLockedOrderRepo:
    """Orders by id behind a readers-writer lock."""

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        self._data = {order.id: order for order in orders}
        self._lock = _ReadWriteLock()

    def get(self, order_id: int) -> Order | None:
        with self._lock.reading():
            return self._data.get(order_id)

    def add(self, order: Order) -> None:
        with self._lock.writing():
            self._data[order.id] = order


class ShardedOrderRepo:
    """Orders spread over independently locked shards by ``id % shards_count``."""

    def __init__(self, orders: Iterable[Order] = (), shards_count: int = 1) -> None:
        if shards_count <= 0:
            raise ValueError("shards_count must be positive")
        self._shards = [LockedOrderRepo() for _ in range(shards_count)]
        self._shards_count = shards_count
        for order in orders:
            self.add(order)

    def _shard(self, order_id: int) -> LockedOrderRepo:
        return self._shards[order_id % self._shards_count]

    def get(self, order_id: int) -> Order | None:
        return self._shard(order_id).get(order_id)

    def add(self, order: Order) -> None:
        self._shard(order.id).add(order)


class DictOrderRepo:
    """Orders by id in a dict relying on atomic single-key operations."""

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        self._data = {order.id: order for order in orders}

    def get(self, order_id: int) -> Order | None:
        return self._data.get(order_id)

    def add(self, order: Order) -> None:
        self._data[order.id] = order