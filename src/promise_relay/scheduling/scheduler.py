"""Single-threaded cooperative schedulers.

Promise continuations never run inside the call that settles a promise or
registers a handler. They are queued here and run on a later turn, after the
current synchronous unit of work has returned.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any, Protocol

from promise_relay.errors import SchedulerReentryError, SchedulerStalledError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 10_000


class Scheduler(Protocol):
    """Anything that can run a callback on a later turn."""

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None: ...


class TurnScheduler:
    """An explicit FIFO of callbacks, drained by the host.

    A turn runs exactly the callbacks that were queued when the turn started.
    Callbacks queued during a turn run on the next one, so ordering is FIFO
    across the whole queue and within a single promise.
    """

    def __init__(
        self,
        *,
        max_turns: int = DEFAULT_MAX_TURNS,
        report_unhandled_rejections: bool | None = None,
    ) -> None:
        if max_turns <= 0:
            raise ValueError("max_turns must be positive")
        # None defers to the process-wide default in promise_relay.promises.
        self.report_unhandled_rejections = report_unhandled_rejections
        self._queue: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()
        self._max_turns = max_turns
        self._running = False

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.append((callback, args))

    def run_once(self) -> int:
        """Run one turn. Returns the number of callbacks run."""

        if self._running:
            raise SchedulerReentryError("Scheduler is already draining")

        self._running = True
        try:
            count = len(self._queue)
            for _ in range(count):
                callback, args = self._queue.popleft()
                try:
                    callback(*args)
                except Exception:
                    logger.exception(
                        "Scheduled callback failed", extra={"callback": repr(callback)}
                    )
            return count
        finally:
            self._running = False

    def run_until_idle(self, max_turns: int | None = None) -> int:
        """Run turns until nothing is queued.

        Raises:
            SchedulerStalledError: If the queue is still not empty after
                `max_turns` turns (a continuation keeps rescheduling itself).
        """

        budget = max_turns if max_turns is not None else self._max_turns
        total = 0
        turns = 0
        while self._queue:
            if turns >= budget:
                raise SchedulerStalledError(
                    f"Scheduler still has {len(self._queue)} callbacks after {turns} turns"
                )
            total += self.run_once()
            turns += 1
        if total:
            logger.debug("Scheduler idle", extra={"callbacks": total, "turns": turns})
        return total


class LoopScheduler:
    """Adapter that schedules onto an asyncio event loop.

    Useful when the host already runs a loop; ordering follows the loop's own
    FIFO `call_soon` queue.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        report_unhandled_rejections: bool | None = None,
    ) -> None:
        self._loop = loop
        self.report_unhandled_rejections = report_unhandled_rejections

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self.loop.call_soon(callback, *args)


_default_scheduler: Scheduler = TurnScheduler()


def get_default_scheduler() -> Scheduler:
    """Return the process-wide scheduler used when none is passed explicitly."""

    return _default_scheduler


def set_default_scheduler(scheduler: Scheduler) -> Scheduler:
    """Replace the process-wide scheduler. Returns the previous one."""

    global _default_scheduler
    previous = _default_scheduler
    _default_scheduler = scheduler
    return previous
