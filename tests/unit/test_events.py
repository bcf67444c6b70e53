"""Unit tests for the transition event stream."""

from __future__ import annotations

from promise_relay.navigation.events import EventStream, TransitionEvent


def test_emit_delivers_in_subscription_order(events: EventStream) -> None:
    seen: list[tuple[str, TransitionEvent]] = []
    events.subscribe("done", lambda e: seen.append(("first", e)))
    events.subscribe("done", lambda e: seen.append(("second", e)))

    count = events.emit("done", {"path": "/x"})

    assert count == 2
    assert [label for label, _ in seen] == ["first", "second"]
    assert seen[0][1] == TransitionEvent(name="done", payload={"path": "/x"})


def test_emit_without_subscribers_is_a_no_op(events: EventStream) -> None:
    assert events.emit("nobody") == 0


def test_unsubscribe_removes_only_that_handler(events: EventStream) -> None:
    seen: list[str] = []
    stop_a = events.subscribe("done", lambda _e: seen.append("a"))
    events.subscribe("done", lambda _e: seen.append("b"))

    stop_a()
    stop_a()
    events.emit("done")

    assert seen == ["b"]
    assert events.subscriber_count("done") == 1


def test_handler_may_unsubscribe_during_delivery(events: EventStream) -> None:
    seen: list[str] = []
    stop: list = []

    def once(_event: TransitionEvent) -> None:
        seen.append("once")
        stop[0]()

    stop.append(events.subscribe("done", once))
    events.subscribe("done", lambda _e: seen.append("always"))

    events.emit("done")
    events.emit("done")

    assert seen == ["once", "always", "always"]
