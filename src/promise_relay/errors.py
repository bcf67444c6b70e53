"""Exception hierarchy for promise-relay.

Rejections are values that travel through promise chains. The exceptions
below are raised synchronously and signal misuse of the API, except for
`Rejection`, which handlers raise to reject with an arbitrary reason.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for all promise-relay exceptions."""


class Rejection(RelayError):
    """Raised inside a handler or hook to reject with `reason`.

    The reason is carried unchanged to the downstream promise; it does not
    have to be an exception (a failed response envelope is typical).
    """

    def __init__(self, reason: object) -> None:
        super().__init__(reason)
        self.reason = reason


class PromiseStateError(RelayError, RuntimeError):
    """Raised when reading `value`/`reason` of a promise in the wrong state."""


class SchedulerStalledError(RelayError, RuntimeError):
    """Raised when draining a scheduler exceeds its turn budget."""


class SchedulerReentryError(RelayError, RuntimeError):
    """Raised when a scheduler is drained from inside one of its callbacks."""


class PipelineSealedError(RelayError, RuntimeError):
    """Raised when an interceptor is added after the pipeline was built."""


class FlashSubscriptionError(RelayError, RuntimeError):
    """Raised when a flash queue is subscribed to an event stream twice."""
