"""Order events and their factory."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .domain import (
    Clock,
    IntGenerator,
    SeqGen,
    StrGenerator,
    TimeGenerator,
    UUIDv4Generator,
)


class EventType(str, Enum):
    ORDER_CREATED = "order-created"
    ORDER_CANCELED = "order-canceled"


@dataclass
class Event:
    """Something that happened to an order."""

    id: int
    event_type: EventType
    operation_moment: datetime

    def to_json(self) -> str:
        """Serialise as ``{"id", "event", "moment"}``."""
        return json.dumps(
            {
                "id": self.id,
                "event": EventType(self.event_type).value,
                "moment": self.operation_moment.isoformat(),
            }
        )


@dataclass
class EventFactory:
    """Builds events from pluggable generators."""

    order_id_generator: IntGenerator
    idempotent_key_generator: StrGenerator
    operation_moment_generator: TimeGenerator

    def create(self, event_type: EventType) -> Event:
        return Event(
            id=self.order_id_generator.generate(),
            event_type=event_type,
            operation_moment=self.operation_moment_generator.generate(),
        )


def new_default_factory(start: int) -> EventFactory:
    """Factory with sequential order ids beginning at ``start``."""
    return EventFactory(SeqGen(start), UUIDv4Generator(), Clock())