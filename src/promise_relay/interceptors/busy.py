"""Busy indicator driven by the interceptor pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from promise_relay.errors import Rejection
from promise_relay.interceptors.envelope import RequestConfig
from promise_relay.interceptors.pipeline import Interceptor


class BusyTracker:
    """Counts in-flight requests; `busy` is true while any is outstanding.

    Side-effect only: configs, values and reasons pass through unmodified.
    A request that failed in an earlier request hook is still counted as
    started, so every completion has a matching start.
    """

    def __init__(self, on_change: Callable[[bool], None] | None = None) -> None:
        self._in_flight = 0
        self._on_change = on_change

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    def interceptor(self) -> Interceptor:
        return Interceptor(
            on_request=self._started,
            on_request_failure=self._started_failed,
            on_success=self._finished_ok,
            on_failure=self._finished_failed,
            name="busy-tracker",
        )

    def _started(self, config: RequestConfig) -> RequestConfig:
        self._count_start()
        return config

    def _started_failed(self, reason: Any) -> Any:
        self._count_start()
        raise Rejection(reason)

    def _finished_ok(self, value: Any) -> Any:
        self._finish()
        return value

    def _finished_failed(self, reason: Any) -> Any:
        self._finish()
        raise Rejection(reason)

    def _count_start(self) -> None:
        was_busy = self.busy
        self._in_flight += 1
        self._notify(was_busy)

    def _finish(self) -> None:
        was_busy = self.busy
        self._in_flight -= 1
        self._notify(was_busy)

    def _notify(self, was_busy: bool) -> None:
        if self._on_change is not None and was_busy != self.busy:
            self._on_change(self.busy)
