import json
from datetime import datetime, timezone

from orderlab.domain import SeqGen, UUIDv4Generator
from orderlab.events import Event, EventFactory, EventType, new_default_factory


def test_event_type_values():
    assert EventType.ORDER_CREATED.value == "order-created"
    assert EventType("order-canceled") is EventType.ORDER_CANCELED


def test_default_factory_sequential_ids():
    factory = new_default_factory(10)
    events = [factory.create(EventType.ORDER_CREATED) for _ in range(3)]
    assert [e.id for e in events] == [10, 11, 12]
    assert all(e.event_type is EventType.ORDER_CREATED for e in events)


def test_factory_uses_moment_generator():
    moment = datetime(2024, 1, 2, tzinfo=timezone.utc)

    class Fixed:
        def generate(self):
            return moment

    factory = EventFactory(SeqGen(1), UUIDv4Generator(), Fixed())
    event = factory.create(EventType.ORDER_CANCELED)
    assert event == Event(1, EventType.ORDER_CANCELED, moment)


def test_to_json_round_trip():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    event = Event(42, EventType.ORDER_CREATED, moment)
    data = json.loads(event.to_json())
    assert set(data) == {"id", "event", "moment"}
    assert data["id"] == 42
    assert data["event"] == "order-created"
    assert datetime.fromisoformat(data["moment"]) == moment