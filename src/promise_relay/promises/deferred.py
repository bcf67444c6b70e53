"""Deferred/promise core.

A `Deferred` is the producer-side handle: it holds the sole authority to
settle its paired `Promise`. Consumers only ever see the `Promise`, which is
read-only apart from registering continuations with `then`.

Rules:
- A promise settles at most once; later `resolve`/`reject` calls are ignored.
- Continuations fire exactly once, in registration order, always on a later
  scheduler turn (never inside `resolve`, `reject` or `then`).
- A handler that returns a promise makes the downstream promise adopt that
  promise's outcome (one level of unwrap per `then`).
- A handler rejects by raising `Rejection(reason)`, by raising any other
  exception (the exception becomes the reason) or by returning a rejected
  promise.

Unhandled rejections are never raised. A rejection with nothing attached is
silently dropped unless diagnostic reporting is on, in which case it is
logged as a warning. Attach a rejection handler to the end of every chain
whose failures matter.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from promise_relay.errors import PromiseStateError, Rejection
from promise_relay.scheduling.scheduler import Scheduler, get_default_scheduler

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]

_report_unhandled = True


def set_unhandled_rejection_reporting(enabled: bool) -> None:
    """Set the default for schedulers that carry no reporting preference."""

    global _report_unhandled
    _report_unhandled = enabled


class PromiseState(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class _Continuation:
    on_fulfilled: Handler | None
    on_rejected: Handler | None
    downstream: Deferred


class Promise:
    """Read-only handle to a one-shot asynchronous outcome."""

    __slots__ = ("_scheduler", "_state", "_value", "_reason", "_continuations", "_handled")

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._state = PromiseState.PENDING
        self._value: Any = None
        self._reason: Any = None
        self._continuations: list[_Continuation] = []
        self._handled = False

    def __repr__(self) -> str:
        if self._state is PromiseState.FULFILLED:
            return f"<Promise fulfilled value={self._value!r}>"
        if self._state is PromiseState.REJECTED:
            return f"<Promise rejected reason={self._reason!r}>"
        return f"<Promise pending continuations={len(self._continuations)}>"

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def state(self) -> PromiseState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is PromiseState.PENDING

    @property
    def is_settled(self) -> bool:
        return self._state is not PromiseState.PENDING

    @property
    def value(self) -> Any:
        if self._state is not PromiseState.FULFILLED:
            raise PromiseStateError(f"Promise is {self._state.value}, not fulfilled")
        return self._value

    @property
    def reason(self) -> Any:
        if self._state is not PromiseState.REJECTED:
            raise PromiseStateError(f"Promise is {self._state.value}, not rejected")
        return self._reason

    def then(
        self, on_fulfilled: Handler | None = None, on_rejected: Handler | None = None
    ) -> Promise:
        """Register continuations and return the promise of their outcome.

        A missing handler passes the corresponding outcome through unchanged.
        """

        downstream = Deferred(self._scheduler)
        continuation = _Continuation(on_fulfilled, on_rejected, downstream)
        # Any continuation gives the rejection somewhere to go; if it is not
        # handled downstream, the downstream promise reports it instead.
        self._handled = True
        if self._state is PromiseState.PENDING:
            self._continuations.append(continuation)
        else:
            self._scheduler.call_soon(self._run, continuation)
        return downstream.promise

    def fail(self, on_rejected: Handler) -> Promise:
        """Shorthand for `then(None, on_rejected)`."""

        return self.then(None, on_rejected)

    def always(self, callback: Callable[[], Any]) -> Promise:
        """Run `callback()` on either outcome and pass the outcome through.

        If the callback raises (or returns a promise that rejects) that
        failure replaces the original outcome. If it returns a promise, the
        original outcome is delivered once that promise fulfills.
        """

        def _wrap(deliver: Handler) -> Handler:
            def handler(payload: Any) -> Any:
                result = callback()
                if isinstance(result, Promise):
                    return result.then(lambda _ignored: deliver(payload))
                return deliver(payload)

            return handler

        return self.then(_wrap(_identity), _wrap(_reraise))

    # Producer side: only `Deferred` calls these.

    def _settle(self, state: PromiseState, payload: Any) -> bool:
        if self._state is not PromiseState.PENDING:
            return False

        self._state = state
        if state is PromiseState.FULFILLED:
            self._value = payload
        else:
            self._reason = payload

        continuations, self._continuations = self._continuations, []
        for continuation in continuations:
            self._scheduler.call_soon(self._run, continuation)

        reporting = _reports_unhandled(self._scheduler)
        if state is PromiseState.REJECTED and not self._handled and reporting:
            self._scheduler.call_soon(self._report_if_unhandled)
        return True

    def _run(self, continuation: _Continuation) -> None:
        fulfilled = self._state is PromiseState.FULFILLED
        payload = self._value if fulfilled else self._reason
        handler = continuation.on_fulfilled if fulfilled else continuation.on_rejected
        target = continuation.downstream

        if handler is None:
            target.promise._settle(self._state, payload)
            return

        try:
            result = handler(payload)
        except Rejection as exc:
            target.reject(exc.reason)
            return
        except Exception as exc:
            logger.debug("Handler raised; rejecting downstream promise", exc_info=True)
            target.reject(exc)
            return
        target.resolve(result)

    def _report_if_unhandled(self) -> None:
        if not self._handled:
            logger.warning(
                "Possibly unhandled rejection", extra={"reason": repr(self._reason)}
            )


class Deferred:
    """Write-once producer handle paired with exactly one promise."""

    __slots__ = ("_promise", "_locked")

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._promise = Promise(scheduler or get_default_scheduler())
        # Set once resolve() adopts a pending promise; the outcome is then
        # owned by that promise and later calls must be ignored.
        self._locked = False

    @property
    def promise(self) -> Promise:
        return self._promise

    def resolve(self, value: Any = None) -> None:
        """Fulfill the promise, or adopt the outcome of `value` if it is a promise."""

        if self._ignored("resolve"):
            return

        if isinstance(value, Promise):
            if value is self._promise:
                self._promise._settle(
                    PromiseState.REJECTED, TypeError("A promise cannot resolve to itself")
                )
                return
            self._locked = True
            value.then(self._adopt_value, self._adopt_reason)
            return

        self._promise._settle(PromiseState.FULFILLED, value)

    def reject(self, reason: Any = None) -> None:
        """Reject the promise with `reason` (any object)."""

        if self._ignored("reject"):
            return
        self._promise._settle(PromiseState.REJECTED, reason)

    def _ignored(self, operation: str) -> bool:
        if self._locked or self._promise.is_settled:
            logger.debug("Ignoring %s() on an already settled deferred", operation)
            return True
        return False

    def _adopt_value(self, value: Any) -> None:
        self._promise._settle(PromiseState.FULFILLED, value)

    def _adopt_reason(self, reason: Any) -> None:
        self._promise._settle(PromiseState.REJECTED, reason)


def create_deferred(scheduler: Scheduler | None = None) -> tuple[Deferred, Promise]:
    """Return a fresh deferred and its pending promise."""

    deferred = Deferred(scheduler)
    return deferred, deferred.promise


def resolved(value: Any = None, scheduler: Scheduler | None = None) -> Promise:
    """Return a promise fulfilled with `value` (adopting it if it is a promise)."""

    deferred = Deferred(scheduler)
    deferred.resolve(value)
    return deferred.promise


def rejected(reason: Any = None, scheduler: Scheduler | None = None) -> Promise:
    """Return a promise rejected with `reason`."""

    deferred = Deferred(scheduler)
    deferred.reject(reason)
    return deferred.promise


def when(value: Any, scheduler: Scheduler | None = None) -> Promise:
    """Return `value` unchanged if it is a promise, else a fulfilled promise."""

    if isinstance(value, Promise):
        return value
    return resolved(value, scheduler)


def from_future(future: asyncio.Future[Any], scheduler: Scheduler | None = None) -> Promise:
    """Adapt an asyncio future, as produced by an asyncio-based transport.

    A cancelled future rejects with the `CancelledError`.
    """

    deferred = Deferred(scheduler)

    def _done(done: asyncio.Future[Any]) -> None:
        if done.cancelled():
            deferred.reject(asyncio.CancelledError())
            return
        exc = done.exception()
        if exc is not None:
            deferred.reject(exc.reason if isinstance(exc, Rejection) else exc)
        else:
            deferred.resolve(done.result())

    future.add_done_callback(_done)
    return deferred.promise


def _reports_unhandled(scheduler: Scheduler) -> bool:
    # Schedulers may carry their own preference; None means "use the default".
    preference = getattr(scheduler, "report_unhandled_rejections", None)
    return _report_unhandled if preference is None else bool(preference)


def _identity(value: Any) -> Any:
    return value


def _reraise(reason: Any) -> Any:
    raise Rejection(reason)
