from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransitionEvent:
    """A signal emitted by the routing collaborator.

    Subscribers only rely on the name; the payload is informational.
    """

    name: str
    payload: dict[str, object] = field(default_factory=dict)


TransitionHandler = Callable[[TransitionEvent], None]


class EventStream:
    """Named, synchronous publish/subscribe.

    Handlers run inside `emit`, in subscription order. A handler exception
    propagates to the emitter and stops delivery to later handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[TransitionHandler]] = {}

    def subscribe(self, name: str, handler: TransitionHandler) -> Callable[[], None]:
        """Register `handler` for `name`. Returns a callable that unsubscribes it."""

        handlers = self._handlers.setdefault(name, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def subscriber_count(self, name: str) -> int:
        return len(self._handlers.get(name, ()))

    def emit(self, name: str, payload: dict[str, object] | None = None) -> int:
        """Deliver an event to every current subscriber. Returns how many ran."""

        event = TransitionEvent(name=name, payload=payload or {})
        # Copy so handlers may unsubscribe while the event is delivered.
        handlers = list(self._handlers.get(name, ()))
        logger.debug("Emitting event", extra={"event": name, "subscribers": len(handlers)})
        for handler in handlers:
            handler(event)
        return len(handlers)
