import json
from datetime import datetime, timezone

import pytest

from orderlab.domain import Order
from orderlab.order_api import OrderHandler


class FakeRepo:
    def __init__(self, fail=None):
        self.orders = {}
        self.next_id = 1000
        self.fail = fail

    def _check(self):
        if self.fail is not None:
            raise RuntimeError(self.fail)

    def create(self, order):
        self._check()
        order.id = self.next_id
        self.next_id += 1000
        self.orders[order.id] = order
        return order.id

    def get_by_order_id(self, order_id):
        self._check()
        return self.orders.get(order_id)

    def list_by_user_id(self, user_id):
        self._check()
        return [o for o in self.orders.values() if o.user_id == user_id]

    def list_by_id(self, order_ids):
        self._check()
        return [self.orders[i] for i in order_ids if i in self.orders]


@pytest.fixture
def repo():
    return FakeRepo()


@pytest.fixture
def handler(repo):
    return OrderHandler(repo)


def test_create_stores_order(handler, repo):
    before = datetime.now(timezone.utc)
    status, body = handler.create(b'{"user_id": 7, "description": "books"}')
    payload = json.loads(body)
    assert status == 201
    assert payload["error_message"] == ""
    stored = repo.orders[payload["order_id"]]
    assert stored.user_id == 7
    assert stored.description == "books"
    assert stored.created_at >= before


def test_create_accepts_str_body(handler, repo):
    status, body = handler.create('{"user_id": 3}')
    assert status == 201
    assert repo.orders[json.loads(body)["order_id"]].description == ""


@pytest.mark.parametrize(
    "body",
    [b"", b"{not json", b"[1, 2]", b'{"user_id": "x"}', b'{"user_id": 1.5}', b'{"user_id": true}'],
)
def test_create_bad_request(handler, repo, body):
    status, data = handler.create(body)
    payload = json.loads(data)
    assert status == 400
    assert payload["order_id"] == 0
    assert payload["error_message"]
    assert repo.orders == {}


def test_create_repo_failure(repo):
    status, data = OrderHandler(FakeRepo(fail="db down")).create(b'{"user_id": 1}')
    assert status == 500
    assert json.loads(data)["error_message"] == "db down"


def test_get_by_id_round_trip(handler):
    _, created = handler.create(b'{"user_id": 5, "description": "lamp"}')
    order_id = json.loads(created)["order_id"]
    status, data = handler.get_by_id(json.dumps({"order_id": order_id}))
    payload = json.loads(data)
    assert status == 200
    assert payload["Error"] == ""
    assert payload["order"]["id"] == order_id
    assert payload["order"]["user_id"] == 5
    assert payload["order"]["description"] == "lamp"
    assert datetime.fromisoformat(payload["order"]["created_at"]).tzinfo is not None


def test_get_by_id_bad_request(handler):
    status, data = handler.get_by_id(b"oops")
    assert status == 400
    assert json.loads(data)["order"] is None


def test_get_by_id_repo_failure():
    status, data = OrderHandler(FakeRepo(fail="boom")).get_by_id(b'{"order_id": 1}')
    assert status == 500
    assert json.loads(data)["Error"] == "boom"


def test_list_by_user_id(handler):
    handler.create(b'{"user_id": 9, "description": "a"}')
    handler.create(b'{"user_id": 9, "description": "b"}')
    handler.create(b'{"user_id": 2, "description": "c"}')
    status, data = handler.list_by_user_id(b'{"user_id": 9}')
    payload = json.loads(data)
    assert status == 200
    assert sorted(o["description"] for o in payload["orders"]) == ["a", "b"]
    assert all(o["user_id"] == 9 for o in payload["orders"])


def test_list_by_user_id_repo_failure():
    status, data = OrderHandler(FakeRepo(fail="gone")).list_by_user_id(b'{"user_id": 1}')
    assert status == 500
    assert json.loads(data) == {"orders": None, "Error": "gone"}


def test_list_by_id(handler):
    ids = [json.loads(handler.create(b'{"user_id": 1}')[1])["order_id"] for _ in range(3)]
    status, data = handler.list_by_id(json.dumps({"order_ids": ids[:2]}))
    assert status == 200
    assert [o["id"] for o in json.loads(data)["orders"]] == ids[:2]


def test_list_by_id_rejects_non_list(handler):
    status, data = handler.list_by_id(b'{"order_ids": "1,2"}')
    assert status == 400
    assert json.loads(data)["orders"] is None


def test_field_names_are_case_insensitive(handler, repo):
    status, body = handler.create(b'{"USER_ID": 4, "Description": "pen"}')
    order = repo.orders[json.loads(body)["order_id"]]
    assert status == 201
    assert (order.user_id, order.description) == (4, "pen")


def test_repo_returning_order_instance(repo):
    repo.orders[1] = Order(id=1, user_id=2, description="x")
    status, data = OrderHandler(repo).get_by_id(b'{"order_id": 1}')
    assert status == 200
    assert json.loads(data)["order"]["description"] == "x"