"""Unit tests for the flash message queue.

Each transition shows exactly one queued message (or clears the slot), and a
message is never shown for a transition that happened before it was queued.
"""

from __future__ import annotations

import pytest

from promise_relay.errors import FlashSubscriptionError
from promise_relay.navigation.events import EventStream
from promise_relay.navigation.flash import FlashQueue, FlashState


def test_messages_are_delivered_one_per_transition(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)

    flash.enqueue("A")
    flash.enqueue("B")
    assert flash.current_message() == ""

    events.emit("transition_completed")
    assert flash.current_message() == "A"
    assert flash.state == FlashState.SHOWING

    events.emit("transition_completed")
    assert flash.current_message() == "B"

    events.emit("transition_completed")
    assert flash.current_message() == ""
    assert flash.state == FlashState.IDLE


def test_enqueue_does_not_touch_the_current_slot(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)
    flash.enqueue("first")
    events.emit("transition_completed")

    flash.enqueue("second")

    assert flash.current_message() == "first"
    assert flash.pending == ("second",)


def test_current_message_is_a_pure_read(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)
    flash.enqueue("only")
    events.emit("transition_completed")

    assert flash.current_message() == "only"
    assert flash.current_message() == "only"
    assert flash.pending == ()


def test_other_events_are_ignored(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)
    flash.enqueue("A")

    events.emit("transition_started")

    assert flash.current_message() == ""
    assert flash.pending == ("A",)


def test_custom_transition_event_name(events: EventStream) -> None:
    flash = FlashQueue(transition_event="route_changed")
    flash.subscribe(events)
    flash.enqueue("moved")

    events.emit("transition_completed")
    assert flash.current_message() == ""

    events.emit("route_changed", {"path": "/home"})
    assert flash.current_message() == "moved"


def test_independent_queues_do_not_share_state(events: EventStream) -> None:
    left, right = FlashQueue(), FlashQueue()
    left.subscribe(events)
    right.subscribe(events)

    left.enqueue("left only")
    events.emit("transition_completed")

    assert left.current_message() == "left only"
    assert right.current_message() == ""


def test_subscribe_twice_is_refused(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)

    with pytest.raises(FlashSubscriptionError):
        flash.subscribe(events)


def test_unsubscribe_stops_advancing(events: EventStream) -> None:
    flash = FlashQueue()
    flash.subscribe(events)
    flash.unsubscribe()
    flash.enqueue("held")

    events.emit("transition_completed")

    assert not flash.subscribed
    assert flash.current_message() == ""
    assert flash.pending == ("held",)


def test_empty_message_is_rejected() -> None:
    with pytest.raises(ValueError):
        FlashQueue().enqueue("")


def test_on_transition_can_be_driven_directly() -> None:
    flash = FlashQueue()
    flash.enqueue("manual")

    flash.on_transition()

    assert flash.current_message() == "manual"
