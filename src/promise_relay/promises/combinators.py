"""Aggregate several promises into one."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from promise_relay.promises.deferred import Deferred, Promise, when
from promise_relay.scheduling.scheduler import Scheduler

logger = logging.getLogger(__name__)


def wait_all(
    promises: Iterable[Any] | Mapping[Any, Any], scheduler: Scheduler | None = None
) -> Promise:
    """Wait for every promise and fulfill with their values.

    A sequence yields a list in input order (not completion order); a mapping
    yields a dict with the same keys. Plain values count as already
    fulfilled, and a promise listed twice fills both slots.

    The result rejects with the first rejection reason observed. Remaining
    inputs are not cancelled; their later outcomes are simply ignored.
    An empty input fulfills with an empty list (or dict).

    Raises:
        TypeError: If `promises` is a string or bytes.
    """

    if isinstance(promises, (str, bytes, bytearray)):
        raise TypeError("wait_all expects a collection of promises, not a string")

    if isinstance(promises, Mapping):
        keys = list(promises.keys())
        items = [promises[key] for key in keys]
        return _wait_slots(items, scheduler).then(lambda values: dict(zip(keys, values)))

    return _wait_slots(list(promises), scheduler)


def _wait_slots(items: list[Any], scheduler: Scheduler | None) -> Promise:
    if scheduler is None:
        scheduler = next((item.scheduler for item in items if isinstance(item, Promise)), None)

    combined = Deferred(scheduler)
    results: list[Any] = [None] * len(items)
    remaining = len(items)

    if not items:
        combined.resolve([])
        return combined.promise

    def _on_value(index: int) -> Any:
        def handler(value: Any) -> None:
            nonlocal remaining
            results[index] = value
            remaining -= 1
            if remaining == 0:
                combined.resolve(results)

        return handler

    def _on_reason(index: int) -> Any:
        def handler(reason: Any) -> None:
            if combined.promise.is_pending:
                logger.debug("wait_all failing fast", extra={"slot": index})
            combined.reject(reason)

        return handler

    for index, item in enumerate(items):
        when(item, scheduler).then(_on_value(index), _on_reason(index))

    return combined.promise
