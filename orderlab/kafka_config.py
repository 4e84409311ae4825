"""Kafka client settings and the options that adjust them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

OFFSET_NEWEST = -1
OFFSET_OLDEST = -2
COMPRESSION_LEVEL_DEFAULT = -1000


class Partitioner(Enum):
    MANUAL = "manual"
    RANDOM = "random"
    ROUND_ROBIN = "round_robin"
    HASH = "hash"


class RequiredAcks(IntEnum):
    NO_RESPONSE = 0
    WAIT_FOR_LOCAL = 1
    WAIT_FOR_ALL = -1


class Compression(IntEnum):
    NONE = 0
    GZIP = 1
    SNAPPY = 2
    LZ4 = 3
    ZSTD = 4


@dataclass
class BrokerConfig:
    """Where the brokers are."""

    brokers: list[str] = field(default_factory=list)


@dataclass
class ClientConfig:
    """Producer, network and consumer settings. Durations are in seconds."""

    partitioner: Partitioner = Partitioner.HASH
    required_acks: RequiredAcks = RequiredAcks.WAIT_FOR_LOCAL
    idempotent: bool = False
    retry_max: int = 3
    retry_backoff: float = 0.1
    max_open_requests: int = 5
    flush_messages: int = 0
    flush_frequency: float = 0.0
    compression: Compression = Compression.NONE
    compression_level: int = COMPRESSION_LEVEL_DEFAULT
    return_successes: bool = False
    return_errors: bool = True
    offsets_initial: int = OFFSET_NEWEST


Option = Callable[[ClientConfig], None]


def prepare_producer_config(*options: Option) -> ClientConfig:
    """Producer settings favouring ordering and delivery, then ``options`` in order."""
    config = ClientConfig(
        partitioner=Partitioner.HASH,
        required_acks=RequiredAcks.WAIT_FOR_ALL,
        idempotent=False,
        retry_max=100,
        retry_backoff=0.005,
        max_open_requests=1,
        compression_level=COMPRESSION_LEVEL_DEFAULT,
        compression=Compression.GZIP,
        return_successes=True,
        return_errors=True,
    )
    for option in options:
        option(config)
    return config


def with_producer_partitioner(partitioner: Partitioner) -> Option:
    def apply(config: ClientConfig) -> None:
        config.partitioner = partitioner

    return apply


def with_required_acks(acks: RequiredAcks) -> Option:
    def apply(config: ClientConfig) -> None:
        config.required_acks = acks

    return apply


def with_idempotent() -> Option:
    def apply(config: ClientConfig) -> None:
        config.idempotent = True

    return apply


def with_max_retries(n: int) -> Option:
    def apply(config: ClientConfig) -> None:
        config.retry_max = n

    return apply


def with_retry_backoff(seconds: float) -> Option:
    def apply(config: ClientConfig) -> None:
        config.retry_backoff = seconds

    return apply


def with_max_open_requests(n: int) -> Option:
    def apply(config: ClientConfig) -> None:
        config.max_open_requests = n

    return apply


def with_producer_flush_messages(n: int) -> Option:
    def apply(config: ClientConfig) -> None:
        config.flush_messages = n

    return apply


def with_producer_flush_frequency(seconds: float) -> Option:
    def apply(config: ClientConfig) -> None:
        config.flush_frequency = seconds

    return apply


def with_return_errors_enabled(enabled: bool) -> Option:
    """Toggle delivery of producer errors."""

    def apply(config: ClientConfig) -> None:
        config.return_errors = enabled

    return apply


def with_return_successes_enabled(enabled: bool) -> Option:
    def apply(config: ClientConfig) -> None:
        config.return_successes = enabled

    return apply


def with_offsets_initial(offset: int) -> Option:
    def apply(config: ClientConfig) -> None:
        config.offsets_initial = offset

    return apply