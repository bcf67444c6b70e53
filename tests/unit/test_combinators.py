"""Unit tests for `wait_all`."""

from __future__ import annotations

import pytest

from promise_relay.promises.combinators import wait_all
from promise_relay.promises.deferred import PromiseState, create_deferred, rejected, resolved
from promise_relay.scheduling.scheduler import TurnScheduler


def test_wait_all_preserves_input_order(scheduler: TurnScheduler) -> None:
    d1, p1 = create_deferred(scheduler)
    d2, p2 = create_deferred(scheduler)
    d3, p3 = create_deferred(scheduler)
    combined = wait_all([p1, p2, p3])

    d3.resolve("c")
    scheduler.run_until_idle()
    d1.resolve("a")
    scheduler.run_until_idle()
    assert combined.is_pending

    d2.resolve("b")
    scheduler.run_until_idle()
    assert combined.value == ["a", "b", "c"]


def test_wait_all_fails_fast_on_first_rejection(scheduler: TurnScheduler) -> None:
    d1, p1 = create_deferred(scheduler)
    d2, p2 = create_deferred(scheduler)
    d3, p3 = create_deferred(scheduler)
    combined = wait_all([p1, p2, p3])

    d2.reject("boom")
    scheduler.run_until_idle()
    assert combined.state == PromiseState.REJECTED
    assert combined.reason == "boom"

    # Siblings still settle on their own; the combined outcome does not change.
    d1.resolve("a")
    d3.reject("second failure")
    scheduler.run_until_idle()
    assert p1.value == "a"
    assert combined.reason == "boom"


def test_wait_all_empty_input_fulfills_with_empty_list(scheduler: TurnScheduler) -> None:
    combined = wait_all([], scheduler)
    seen: list[object] = []
    combined.then(seen.append)

    scheduler.run_until_idle()
    assert seen == [[]]


def test_wait_all_mixes_settled_pending_and_plain_values(scheduler: TurnScheduler) -> None:
    deferred, pending = create_deferred(scheduler)
    combined = wait_all([resolved(1, scheduler), pending, 3])

    deferred.resolve(2)
    scheduler.run_until_idle()

    assert combined.value == [1, 2, 3]


def test_wait_all_treats_duplicate_promises_independently(scheduler: TurnScheduler) -> None:
    deferred, promise = create_deferred(scheduler)
    combined = wait_all([promise, promise])

    deferred.resolve("x")
    scheduler.run_until_idle()

    assert combined.value == ["x", "x"]


def test_wait_all_mapping_keeps_keys(scheduler: TurnScheduler) -> None:
    user_deferred, user = create_deferred(scheduler)
    combined = wait_all({"user": user, "settings": resolved({"theme": "dark"}, scheduler)})

    user_deferred.resolve({"name": "ada"})
    scheduler.run_until_idle()

    assert combined.value == {"user": {"name": "ada"}, "settings": {"theme": "dark"}}


def test_wait_all_mapping_rejects_like_sequences(scheduler: TurnScheduler) -> None:
    combined = wait_all({"a": resolved(1, scheduler), "b": rejected("nope", scheduler)})
    scheduler.run_until_idle()

    assert combined.reason == "nope"


def test_wait_all_accepts_generators(scheduler: TurnScheduler) -> None:
    combined = wait_all(resolved(i, scheduler) for i in range(3))
    scheduler.run_until_idle()

    assert combined.value == [0, 1, 2]


def test_wait_all_rejects_string_input(scheduler: TurnScheduler) -> None:
    with pytest.raises(TypeError):
        wait_all("abc", scheduler)
    with pytest.raises(TypeError):
        wait_all(b"abc", scheduler)
