import io
import json

import pytest

from orderlab import logger as logmod
from orderlab.logger import Logger, bind_logger, errorw, infow, new_logger


def records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_infow_writes_json_with_fields():
    stream = io.StringIO()
    Logger(stream, "info").infow("handler: get", "cache-key", "k1")
    (record,) = records(stream)
    assert record["level"] == "info"
    assert record["msg"] == "handler: get"
    assert record["cache-key"] == "k1"


def test_level_filters_lower_messages():
    stream = io.StringIO()
    log = Logger(stream, "error")
    log.infow("quiet")
    log.errorw("loud")
    assert [r["msg"] for r in records(stream)] == ["loud"]


def test_odd_argument_is_kept_as_ignored():
    stream = io.StringIO()
    Logger(stream).infow("m", "a", 1, "dangling")
    (record,) = records(stream)
    assert record["a"] == 1
    assert record["ignored"] == "dangling"


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        Logger(io.StringIO(), "loud")


def test_bound_logger_receives_module_calls():
    stream = io.StringIO()
    with bind_logger(Logger(stream)):
        errorw("bad request", "handler", "set")
    (record,) = records(stream)
    assert record["level"] == "error"
    assert record["handler"] == "set"


def test_without_global_logger_raises(monkeypatch):
    monkeypatch.setattr(logmod, "_global_logger", None)
    with pytest.raises(RuntimeError, match="global logger is nil"):
        infow("nothing")


def test_new_logger_is_created_once(monkeypatch):
    monkeypatch.setattr(logmod, "_global_logger", None)
    first_stream, second_stream = io.StringIO(), io.StringIO()
    first = new_logger(first_stream)
    second = new_logger(second_stream)
    assert second is first
    infow("to global")
    assert [r["msg"] for r in records(first_stream)] == ["to global"]
    assert second_stream.getvalue() == ""


def test_falls_back_to_global_after_binding(monkeypatch):
    global_stream, bound_stream = io.StringIO(), io.StringIO()
    monkeypatch.setattr(logmod, "_global_logger", Logger(global_stream))
    with bind_logger(Logger(bound_stream)):
        infow("inside")
    infow("outside")
    assert [r["msg"] for r in records(bound_stream)] == ["inside"]
    assert [r["msg"] for r in records(global_stream)] == ["outside"]