"""Routing keys and order ids to database shards."""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

T = TypeVar("T")

ShardFn = Callable[[str], int]

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593
ID_SHARD_MODULUS = 1000


class ShardIndexOutOfRangeError(IndexError):
    """Raised when a shard index does not name a known shard."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"shard index is out of range: given index={index}, len={count}")
        self.index = index
        self.count = count


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _scramble(k: int) -> int:
    k = (k * _C1) & _MASK
    k = _rotl(k, 15)
    return (k * _C2) & _MASK


def murmur3_32(data: bytes | str, seed: int = 0) -> int:
    """Return the 32-bit MurmurHash3 (x86 variant) of ``data``."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    h = seed & _MASK
    length = len(data)
    body_end = length - length % 4
    for (block,) in struct.iter_unpack("<I", data[:body_end]):
        h ^= _scramble(block)
        h = _rotl(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK
    tail = data[body_end:]
    if tail:
        h ^= _scramble(int.from_bytes(tail, "little"))
    h ^= length & _MASK
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def murmur3_shard_fn(shards_count: int) -> ShardFn:
    """Map a key to ``murmur3_32(key) % shards_count``, with no seed so results are stable."""
    if shards_count <= 0:
        raise ValueError("shards_count must be positive")

    def shard(key: str) -> int:
        return murmur3_32(key) % shards_count

    return shard


class ShardManager(Generic[T]):
    """Chooses a shard for a key or an order id."""

    def __init__(self, fn: ShardFn, shards: Sequence[T]) -> None:
        self._fn = fn
        self._shards = list(shards)

    def __len__(self) -> int:
        return len(self._shards)

    def shard_index(self, key: str) -> int:
        return self._fn(key)

    def shard_index_from_id(self, order_id: int) -> int:
        """The shard number is kept in the last three decimal digits of an order id."""
        remainder = abs(order_id) % ID_SHARD_MODULUS
        return remainder if order_id >= 0 else -remainder

    def pick(self, index: int) -> T:
        if 0 <= index < len(self._shards):
            return self._shards[index]
        raise ShardIndexOutOfRangeError(index, len(self._shards))