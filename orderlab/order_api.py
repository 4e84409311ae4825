"""JSON request handlers for creating and listing orders."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Protocol

from .domain import Order

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

Reply = tuple[int, bytes]


class OrderRepository(Protocol):
    def create(self, order: Order) -> int: ...

    def get_by_order_id(self, order_id: int) -> Order | None: ...

    def list_by_user_id(self, user_id: int) -> Sequence[Order] | None: ...

    def list_by_id(self, order_ids: list[int]) -> Sequence[Order] | None: ...


class _BadRequest(ValueError):
    pass


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _decode(body: bytes | str) -> dict[str, Any]:
    text = body.decode("utf-8", errors="replace") if isinstance(body, (bytes, bytearray)) else body
    stripped = text.lstrip()
    if not stripped:
        raise _BadRequest("EOF")
    try:
        value, _ = json.JSONDecoder().raw_decode(stripped)
    except json.JSONDecodeError as exc:
        raise _BadRequest(str(exc)) from None
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _BadRequest(f"cannot unmarshal {_kind(value)} into request object")
    return value


def _field(obj: dict[str, Any], name: str) -> Any:
    found = None
    for key, value in obj.items():
        if key == name or key.casefold() == name.casefold():
            found = value
    return found


def _as_int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _BadRequest(f"cannot unmarshal {_kind(value)} into field {name} of type int64")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise _BadRequest(f"cannot unmarshal number {value} into field {name} of type int64")
    return value


def _int_field(obj: dict[str, Any], name: str) -> int:
    return _as_int(_field(obj, name), name)


def _str_field(obj: dict[str, Any], name: str) -> str:
    value = _field(obj, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _BadRequest(f"cannot unmarshal {_kind(value)} into field {name} of type string")
    return value


def _int_list_field(obj: dict[str, Any], name: str) -> list[int]:
    value = _field(obj, name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _BadRequest(f"cannot unmarshal {_kind(value)} into field {name} of type []int64")
    return [_as_int(item, name) for item in value]


def _reply(status: HTTPStatus, payload: dict[str, Any]) -> Reply:
    return int(status), json.dumps(payload, separators=(",", ":")).encode("utf-8")


def _orders(orders: Sequence[Order] | None) -> list[dict[str, Any]] | None:
    if orders is None:
        return None
    return [order.to_dict() for order in orders]


class OrderHandler:
    """Turns JSON request bodies into repository calls; each method returns ``(status, body)``."""

    def __init__(self, repo: OrderRepository) -> None:
        self._repo = repo

    def create(self, body: bytes | str) -> Reply:
        try:
            request = _decode(body)
            user_id = _int_field(request, "user_id")
            description = _str_field(request, "description")
        except _BadRequest as exc:
            return _reply(HTTPStatus.BAD_REQUEST, {"order_id": 0, "error_message": str(exc)})

        order = Order(
            user_id=user_id,
            description=description,
            created_at=datetime.now(timezone.utc),
        )
        try:
            order_id = self._repo.create(order)
        except Exception as exc:
            return _reply(
                HTTPStatus.INTERNAL_SERVER_ERROR, {"order_id": 0, "error_message": str(exc)}
            )

        print(f"order created: {order_id}")
        return _reply(HTTPStatus.CREATED, {"order_id": order_id, "error_message": ""})

    def get_by_id(self, body: bytes | str) -> Reply:
        try:
            order_id = _int_field(_decode(body), "order_id")
        except _BadRequest as exc:
            return _reply(HTTPStatus.BAD_REQUEST, {"order": None, "Error": str(exc)})

        try:
            order = self._repo.get_by_order_id(order_id)
        except Exception as exc:
            return _reply(HTTPStatus.INTERNAL_SERVER_ERROR, {"order": None, "Error": str(exc)})

        print(f"order get: {order}")
        return _reply(
            HTTPStatus.OK, {"order": order.to_dict() if order is not None else None, "Error": ""}
        )

    def list_by_user_id(self, body: bytes | str) -> Reply:
        try:
            user_id = _int_field(_decode(body), "user_id")
        except _BadRequest as exc:
            return _reply(HTTPStatus.BAD_REQUEST, {"orders": None, "Error": str(exc)})

        try:
            orders = self._repo.list_by_user_id(user_id)
        except Exception as exc:
            return _reply(HTTPStatus.INTERNAL_SERVER_ERROR, {"orders": None, "Error": str(exc)})

        status, data = _reply(HTTPStatus.OK, {"orders": _orders(orders), "Error": ""})
        print(f"order list orders by user id: {data.decode('utf-8')}")
        return status, data

    def list_by_id(self, body: bytes | str) -> Reply:
        try:
            order_ids = _int_list_field(_decode(body), "order_ids")
        except _BadRequest as exc:
            return _reply(HTTPStatus.BAD_REQUEST, {"orders": None, "Error": str(exc)})

        try:
            orders = self._repo.list_by_id(order_ids)
        except Exception as exc:
            return _reply(HTTPStatus.INTERNAL_SERVER_ERROR, {"orders": None, "Error": str(exc)})

        status, data = _reply(HTTPStatus.OK, {"orders": _orders(orders), "Error": ""})
        print(f"order list orders by id: {data.decode('utf-8')}")
        return status, data