"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging

from promise_relay.logging import JsonFormatter


def _record(msg: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="promise_relay.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record("hello")))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "promise_relay.test"
    assert payload["message"] == "hello"
    assert "extra" not in payload


def test_json_formatter_includes_extra_and_reprs_unknown_types() -> None:
    marker = object()
    payload = json.loads(JsonFormatter().format(_record("x", reason=marker, slot=2)))

    assert payload["extra"]["slot"] == 2
    assert payload["extra"]["reason"] == repr(marker)
