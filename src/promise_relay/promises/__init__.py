"""Deferreds, promises and the `wait_all` combinator."""

from promise_relay.promises.combinators import wait_all
from promise_relay.promises.deferred import (
    Deferred,
    Promise,
    PromiseState,
    create_deferred,
    from_future,
    rejected,
    resolved,
    when,
)

__all__ = [
    "Deferred",
    "Promise",
    "PromiseState",
    "create_deferred",
    "from_future",
    "rejected",
    "resolved",
    "wait_all",
    "when",
]
