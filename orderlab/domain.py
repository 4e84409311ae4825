"""Orders and the generators used to fabricate them."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Order:
    """A customer order."""

    id: int = 0
    user_id: int = 0
    description: str = ""
    created_at: datetime = field(default=ZERO_TIME)

    def to_dict(self) -> dict[str, Any]:
        """Return the order as a JSON-ready mapping."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }


class IntGenerator(Protocol):
    def generate(self) -> int: ...


class StrGenerator(Protocol):
    def generate(self) -> str: ...


class TimeGenerator(Protocol):
    def generate(self) -> datetime: ...


class SeqGen:
    """Yields consecutive integers starting from ``start``."""

    def __init__(self, start: int = 0) -> None:
        self._cur = start

    def generate(self) -> int:
        value = self._cur
        self._cur += 1
        return value


class RndGen:
    """Yields random integers in ``[0, max_value)``."""

    def __init__(self, max_value: int) -> None:
        if max_value <= 0:
            raise ValueError("max_value must be positive")
        self._max = max_value

    def generate(self) -> int:
        return random.randrange(self._max)


class Clock:
    """Yields the current moment."""

    def generate(self) -> datetime:
        return datetime.now(timezone.utc)


class UUIDv4Generator:
    """Yields one random version-4 UUID, fixed when the generator is made."""

    def __init__(self) -> None:
        self._value = uuid.uuid4()

    def generate(self) -> str:
        return str(self._value)


@dataclass
class OrderFactory:
    """Builds orders from pluggable generators."""

    user_id_generator: IntGenerator
    description_generator: StrGenerator
    created_at_generator: TimeGenerator

    def create(self) -> Order:
        return Order(
            user_id=self.user_id_generator.generate(),
            description=self.description_generator.generate(),
            created_at=self.created_at_generator.generate(),
        )


def new_default_factory() -> OrderFactory:
    """Factory with random user ids below 1000, a UUID description and the clock."""
    return OrderFactory(RndGen(1000), UUIDv4Generator(), Clock())