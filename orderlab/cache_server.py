"""HTTP front end for the leaky cache, with request metrics."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlsplit

from .leaky_cache import CacheNoValueError, LeakyCache
from .logger import Logger, new_logger
from .metrics import Metrics

CACHE_SIZE = 100
TTL = 600.0
TEXT_TYPE = "text/plain; charset=utf-8"
JSON_TYPE = "application/json"
METRICS_TYPE = "text/plain; version=0.0.4; charset=utf-8"

Reply = tuple[int, str, bytes]

_access_log = logging.getLogger(__name__)


class _BadPayload(ValueError):
    pass


def _field(obj: dict[str, Any], name: str) -> str:
    found: Any = None
    for key, value in obj.items():
        if key.casefold() == name.casefold():
            found = value
    if found is None:
        return ""
    if not isinstance(found, str):
        raise _BadPayload(f"cannot unmarshal value into field {name} of type string")
    return found


def _decode_set(body: bytes | str) -> tuple[str, str]:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise _BadPayload(str(exc)) from None
    if payload is None:
        return "", ""
    if not isinstance(payload, dict):
        raise _BadPayload("cannot unmarshal request: expected an object")
    return _field(payload, "Key"), _field(payload, "Value")


class CacheApp:
    """The set, get and metrics handlers; each returns ``(status, content_type, body)``."""

    def __init__(
        self,
        cache: LeakyCache | None = None,
        metrics: Metrics | None = None,
        logger: Logger | None = None,
        *,
        max_delay: float = 1.0,
    ) -> None:
        self.cache = cache if cache is not None else LeakyCache(CACHE_SIZE, TTL)
        self.metrics = metrics if metrics is not None else Metrics()
        self.logger = logger if logger is not None else new_logger(sys.stdout)
        self._max_delay = max_delay

    def _pause(self) -> None:
        if self._max_delay > 0:
            time.sleep(random.uniform(0, self._max_delay))

    def _timed(self, handler: str, fn: Any, *args: Any) -> Reply:
        self.metrics.inc_request_counter(handler)
        started = time.perf_counter()
        try:
            return fn(*args)
        finally:
            self.metrics.store_handler_duration(handler, time.perf_counter() - started)

    def handle_set(self, body: bytes | str) -> Reply:
        return self._timed("set", self._set, body)

    def _set(self, body: bytes | str) -> Reply:
        self._pause()
        try:
            key, value = _decode_set(body)
        except _BadPayload as exc:
            return int(HTTPStatus.INTERNAL_SERVER_ERROR), TEXT_TYPE, str(exc).encode("utf-8")
        if not key or not value:
            self.logger.errorw("handler: set, request is invalid")
            return int(HTTPStatus.BAD_REQUEST), TEXT_TYPE, b"value or key is empty"
        self.logger.infow("handler: set", "cache-key", key, "cache-value", value)
        try:
            self.cache.set(key, value.encode("utf-8"))
        except Exception as exc:
            return int(HTTPStatus.INTERNAL_SERVER_ERROR), TEXT_TYPE, str(exc).encode("utf-8")
        return int(HTTPStatus.OK), TEXT_TYPE, b""

    def handle_get(self, key: str | None) -> Reply:
        return self._timed("get", self._get, key or "")

    def _get(self, key: str) -> Reply:
        self._pause()
        if not key:
            return int(HTTPStatus.BAD_REQUEST), TEXT_TYPE, b"key must be passed"
        self.logger.infow("handler: get", "cache-key", key)
        try:
            value = self.cache.get(key)
        except CacheNoValueError:
            return int(HTTPStatus.NOT_FOUND), TEXT_TYPE, b"key not found"
        except Exception as exc:
            return int(HTTPStatus.INTERNAL_SERVER_ERROR), TEXT_TYPE, str(exc).encode("utf-8")
        return int(HTTPStatus.OK), JSON_TYPE, value

    def handle_metrics(self) -> Reply:
        return int(HTTPStatus.OK), METRICS_TYPE, self.metrics.render().encode("utf-8")


def make_server(app: CacheApp, host: str = "", port: int = 8080) -> ThreadingHTTPServer:
    """Build (but do not start) an HTTP server routing to ``app``."""

    class _Handler(BaseHTTPRequestHandler):
        def _send(self, status: int, content_type: str, body: bytes, allow: str = "") -> None:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            if allow:
                self.send_header("Allow", allow)
            self.end_headers()
            self.wfile.write(body)

        def _dispatch(self, method: str) -> None:
            url = urlsplit(self.path)
            routes = {"/set": "POST", "/get": "GET", "/metrics": "GET"}
            expected = routes.get(url.path)
            if expected is None:
                self._send(int(HTTPStatus.NOT_FOUND), TEXT_TYPE, b"404 page not found\n")
                return
            if method != expected:
                self._send(
                    int(HTTPStatus.METHOD_NOT_ALLOWED),
                    TEXT_TYPE,
                    b"Method Not Allowed\n",
                    allow=expected,
                )
                return
            if url.path == "/set":
                length = int(self.headers.get("Content-Length") or 0)
                reply = app.handle_set(self.rfile.read(length))
            elif url.path == "/get":
                reply = app.handle_get(parse_qs(url.query).get("key", [""])[0])
            else:
                reply = app.handle_metrics()
            self._send(*reply)

        def do_GET(self) -> None:
            self._dispatch("GET")

        def do_POST(self) -> None:
            self._dispatch("POST")

        def do_PUT(self) -> None:
            self._dispatch("PUT")

        def do_DELETE(self) -> None:
            self._dispatch("DELETE")

        def do_PATCH(self) -> None:
            self._dispatch("PATCH")

        def log_message(self, format: str, *args: Any) -> None:
            # Route access lines through logging instead of raw stderr.
            _access_log.debug("%s - " + format, self.address_string(), *args)

    return ThreadingHTTPServer((host, port), _Handler)


def main(argv: list[str] | None = None) -> int:
    """Serve the cache over HTTP until interrupted."""
    parser = argparse.ArgumentParser(description="Serve a key/value cache over HTTP.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)

    app = CacheApp()
    server = make_server(app, args.host, args.port)
    app.logger.errorw("app bootstrapped")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0