"""Structured JSON logging with a process-wide default and context binding."""

from __future__ import annotations

import json
import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TextIO

_LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_global_logger: Logger | None = None
_global_lock = threading.Lock()
_bound: ContextVar[Logger | None] = ContextVar("orderlab_logger", default=None)


def _fields(args: tuple[Any, ...]) -> dict[str, Any]:
    fields = {str(key): value for key, value in zip(args[::2], args[1::2])}
    if len(args) % 2:
        fields["ignored"] = args[-1]
    return fields


class Logger:
    """Writes one JSON object per line: level, timestamp, message and key/value fields."""

    def __init__(self, stream: TextIO | None = None, level: str = "info") -> None:
        if level not in _LEVELS:
            raise ValueError(f"unknown level: {level}")
        self._stream = stream
        self._threshold = _LEVELS[level]
        self._lock = threading.Lock()

    def _log(self, level: str, msg: str, args: tuple[Any, ...]) -> None:
        if _LEVELS[level] < self._threshold:
            return
        record: dict[str, Any] = {"level": level, "ts": time.time(), "msg": msg}
        record.update(_fields(args))
        line = json.dumps(record, default=str)
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(line + "\n")
            stream.flush()

    def infow(self, msg: str, *args: Any) -> None:
        self._log("info", msg, args)

    def errorw(self, msg: str, *args: Any) -> None:
        self._log("error", msg, args)


def new_logger(stream: TextIO | None = None, level: str = "info") -> Logger:
    """Make the process-wide logger on the first call; every call returns that logger."""
    global _global_logger
    logger = Logger(stream, level)
    with _global_lock:
        if _global_logger is None:
            _global_logger = logger
        return _global_logger


@contextmanager
def bind_logger(logger: Logger) -> Iterator[Logger]:
    """Route module-level logging in this context to ``logger``."""
    token = _bound.set(logger)
    try:
        yield logger
    finally:
        _bound.reset(token)


def _resolve() -> Logger:
    bound = _bound.get()
    if bound is not None:
        return bound
    if _global_logger is None:
        raise RuntimeError("global logger is nil")
    return _global_logger


def infow(msg: str, *args: Any) -> None:
    _resolve().infow(msg, *args)


def errorw(msg: str, *args: Any) -> None:
    _resolve().errorw(msg, *args)