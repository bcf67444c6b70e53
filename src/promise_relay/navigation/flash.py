"""Flash messages: one-shot notices shown on the next navigation transition.

Producers enqueue messages at any time. Each transition event moves exactly
one message (the oldest) into the current slot, or clears the slot when
nothing is pending. Messages queued in a burst are shown on successive
transitions, never dropped, and a message queued after a transition is only
shown on a later one.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from enum import Enum

from promise_relay.errors import FlashSubscriptionError
from promise_relay.navigation.events import EventStream, TransitionEvent

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_EVENT = "transition_completed"


class FlashState(str, Enum):
    IDLE = "idle"
    SHOWING = "showing"


class FlashQueue:
    def __init__(self, transition_event: str = DEFAULT_TRANSITION_EVENT) -> None:
        self._transition_event = transition_event
        self._pending: deque[str] = deque()
        self._current = ""
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def transition_event(self) -> str:
        return self._transition_event

    @property
    def state(self) -> FlashState:
        return FlashState.SHOWING if self._current else FlashState.IDLE

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    def enqueue(self, message: str) -> None:
        """Queue `message` for a future transition; the current slot is untouched."""

        if not message:
            raise ValueError("Flash message must be a non-empty string")
        self._pending.append(message)

    def current_message(self) -> str:
        """The message to display now, or "" when there is none."""

        return self._current

    def on_transition(self, event: TransitionEvent | None = None) -> None:
        """Advance by exactly one message (or clear) for one transition."""

        previous = self._current
        self._current = self._pending.popleft() if self._pending else ""
        if self._current:
            logger.debug(
                "Flash message shown",
                extra={"remaining": len(self._pending), "event": getattr(event, "name", None)},
            )
        elif previous:
            logger.debug("Flash message cleared")

    def subscribe(self, stream: EventStream) -> None:
        """Attach to `stream`; call once at startup."""

        if self._unsubscribe is not None:
            raise FlashSubscriptionError("Flash queue is already subscribed to an event stream")
        self._unsubscribe = stream.subscribe(self._transition_event, self.on_transition)

    def unsubscribe(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
