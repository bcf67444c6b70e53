"""promise-relay.

Asynchronous result composition for UI-side code:
- deferreds and chainable promises on a cooperative scheduler
- `wait_all` to combine independent promises
- an interceptor pipeline around the transport boundary
- a flash message queue advanced by navigation transitions
"""

__version__ = "0.1.0"

from promise_relay.core.config import RelayConfig
from promise_relay.core.runtime import RelayRuntime
from promise_relay.errors import Rejection, RelayError
from promise_relay.interceptors import (
    BusyTracker,
    Interceptor,
    InterceptorPipeline,
    PipelineBuilder,
    RequestConfig,
    ResponseEnvelope,
    TransportBoundary,
)
from promise_relay.navigation import EventStream, FlashQueue, FlashState, TransitionEvent
from promise_relay.promises import (
    Deferred,
    Promise,
    PromiseState,
    create_deferred,
    rejected,
    resolved,
    wait_all,
    when,
)
from promise_relay.scheduling import TurnScheduler

__all__ = [
    "__version__",
    "BusyTracker",
    "Deferred",
    "EventStream",
    "FlashQueue",
    "FlashState",
    "Interceptor",
    "InterceptorPipeline",
    "PipelineBuilder",
    "Promise",
    "PromiseState",
    "Rejection",
    "RelayConfig",
    "RelayError",
    "RelayRuntime",
    "RequestConfig",
    "ResponseEnvelope",
    "TransitionEvent",
    "TransportBoundary",
    "TurnScheduler",
    "create_deferred",
    "rejected",
    "resolved",
    "wait_all",
    "when",
]
