"""Interceptor pipeline around the transport boundary.

Interceptors are registered once, at configuration time, through a
`PipelineBuilder`. The resulting `InterceptorPipeline` is immutable and is
handed to a `TransportBoundary`, which runs every request and response
through it without the calling code knowing the hooks exist.

Hook contracts, all applied in registration order:

- `on_request(config) -> config`: may rewrite the outbound `RequestConfig`.
- `on_success(value) -> value`: receives the current value and returns the
  value passed to the next hook. Side-effect-only hooks return it unchanged.
- `on_failure(reason) -> value | None`: raise (`Rejection(reason)` or any
  exception) to fail with a new reason; return `None` to let the incoming
  reason propagate; return anything else to recover. A recovered value is
  delivered as returned, envelope or raw data, and later interceptors see it
  through their `on_success` hooks.
- `on_request_failure(reason)`: same contract, for failures raised by an
  earlier request hook.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from promise_relay.errors import PipelineSealedError, Rejection
from promise_relay.interceptors.envelope import RequestConfig
from promise_relay.promises.deferred import Handler, Promise, resolved, when
from promise_relay.scheduling.scheduler import Scheduler

logger = logging.getLogger(__name__)

# The transport collaborator: performs the call and returns a promise of a
# ResponseEnvelope (a plain envelope is accepted and treated as fulfilled).
Transport = Callable[[RequestConfig], Any]


@dataclass(frozen=True, slots=True)
class Interceptor:
    on_success: Handler | None = None
    on_failure: Handler | None = None
    on_request: Handler | None = None
    on_request_failure: Handler | None = None
    name: str = "interceptor"

    @property
    def handles_requests(self) -> bool:
        return self.on_request is not None or self.on_request_failure is not None

    @property
    def handles_responses(self) -> bool:
        return self.on_success is not None or self.on_failure is not None


def _failure_step(hook: Handler | None, name: str) -> Handler | None:
    if hook is None:
        return None

    def handler(reason: Any) -> Any:
        outcome = hook(reason)
        if outcome is None:
            raise Rejection(reason)
        logger.debug("Interceptor recovered from failure", extra={"interceptor": name})
        return outcome

    return handler


class InterceptorPipeline:
    """An immutable, ordered set of interceptors."""

    def __init__(self, interceptors: Iterable[Interceptor] = ()) -> None:
        self._interceptors: tuple[Interceptor, ...] = tuple(interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self._interceptors)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    def prepare(self, config: RequestConfig, scheduler: Scheduler | None = None) -> Promise:
        """Run the request hooks; returns a promise of the final config."""

        promise = resolved(config, scheduler)
        for interceptor in self._interceptors:
            if interceptor.handles_requests:
                promise = promise.then(
                    interceptor.on_request,
                    _failure_step(interceptor.on_request_failure, interceptor.name),
                )
        return promise

    def wrap(self, promise: Promise) -> Promise:
        """Return a new promise whose outcome has passed every response hook."""

        for interceptor in self._interceptors:
            if interceptor.handles_responses:
                promise = promise.then(
                    interceptor.on_success,
                    _failure_step(interceptor.on_failure, interceptor.name),
                )
        return promise


class PipelineBuilder:
    """Configuration-time registration of interceptors."""

    def __init__(self) -> None:
        self._interceptors: list[Interceptor] = []
        self._sealed = False

    def add(self, interceptor: Interceptor) -> PipelineBuilder:
        if self._sealed:
            raise PipelineSealedError(
                f"Cannot add {interceptor.name!r}: the pipeline has already been built"
            )
        self._interceptors.append(interceptor)
        return self

    def build(self) -> InterceptorPipeline:
        self._sealed = True
        pipeline = InterceptorPipeline(self._interceptors)
        logger.debug(
            "Interceptor pipeline built",
            extra={"interceptors": [i.name for i in pipeline]},
        )
        return pipeline


class TransportBoundary:
    """Adapter between callers and the transport collaborator.

    Every call goes: request hooks -> transport -> response hooks. The
    promise returned to the caller never exposes the raw transport promise.
    """

    def __init__(
        self,
        send: Transport,
        pipeline: InterceptorPipeline | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._send = send
        self._pipeline = pipeline or InterceptorPipeline()
        self._scheduler = scheduler

    @property
    def pipeline(self) -> InterceptorPipeline:
        return self._pipeline

    def request(self, config: RequestConfig) -> Promise:
        logger.debug("Dispatching request", extra={"method": config.method, "url": config.url})
        prepared = self._pipeline.prepare(config, self._scheduler)
        return self._pipeline.wrap(prepared.then(self._dispatch))

    def _dispatch(self, config: RequestConfig) -> Promise:
        return when(self._send(config), self._scheduler)

    def get(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Promise:
        return self.request(RequestConfig("GET", url, params=params or {}, headers=headers or {}))

    def delete(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Promise:
        return self.request(
            RequestConfig("DELETE", url, params=params or {}, headers=headers or {})
        )

    def head(self, url: str, *, headers: dict[str, str] | None = None) -> Promise:
        return self.request(RequestConfig("HEAD", url, headers=headers or {}))

    def post(self, url: str, data: Any = None, *, headers: dict[str, str] | None = None) -> Promise:
        return self.request(RequestConfig("POST", url, headers=headers or {}, data=data))

    def put(self, url: str, data: Any = None, *, headers: dict[str, str] | None = None) -> Promise:
        return self.request(RequestConfig("PUT", url, headers=headers or {}, data=data))

    def patch(
        self, url: str, data: Any = None, *, headers: dict[str, str] | None = None
    ) -> Promise:
        return self.request(RequestConfig("PATCH", url, headers=headers or {}, data=data))
