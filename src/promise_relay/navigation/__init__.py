"""Transition events and the flash message queue."""

from promise_relay.navigation.events import EventStream, TransitionEvent
from promise_relay.navigation.flash import FlashQueue, FlashState

__all__ = ["EventStream", "FlashQueue", "FlashState", "TransitionEvent"]
