"""Runtime facade wiring the relay components together."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from promise_relay.core.config import RelayConfig
from promise_relay.interceptors.pipeline import (
    InterceptorPipeline,
    PipelineBuilder,
    Transport,
    TransportBoundary,
)
from promise_relay.logging import configure_logging
from promise_relay.navigation.events import EventStream
from promise_relay.navigation.flash import FlashQueue
from promise_relay.promises.combinators import wait_all
from promise_relay.promises.deferred import (
    Deferred,
    Promise,
    create_deferred,
)
from promise_relay.scheduling.scheduler import TurnScheduler

logger = logging.getLogger(__name__)


class RelayRuntime:
    """One scheduler, one event stream and one flash queue, built from config.

    The runtime owns its components; several runtimes can coexist (for
    example one per test).
    """

    def __init__(self, config: RelayConfig | None = None, *, setup_logging: bool = True) -> None:
        """Initialize the runtime.

        Args:
            config: Configuration object. If None, loads from environment.
            setup_logging: Install the root log handler from `config`.
        """
        self.config = config or RelayConfig()
        if setup_logging:
            configure_logging(
                self.config.log_level,
                json_output=self.config.json_logs,
                debug=self.config.debug,
            )
        self.scheduler = TurnScheduler(
            max_turns=self.config.max_drain_turns,
            report_unhandled_rejections=self.config.report_unhandled_rejections,
        )
        self.events = EventStream()
        self.flash = FlashQueue(transition_event=self.config.transition_event)
        self.flash.subscribe(self.events)

        logger.info(
            "Relay runtime initialized",
            extra={"transition_event": self.config.transition_event},
        )

    def defer(self) -> tuple[Deferred, Promise]:
        return create_deferred(self.scheduler)

    def wait_all(self, promises: Iterable[Any] | Mapping[Any, Any]) -> Promise:
        return wait_all(promises, self.scheduler)

    def pipeline(self) -> PipelineBuilder:
        return PipelineBuilder()

    def boundary(
        self, send: Transport, pipeline: InterceptorPipeline | None = None
    ) -> TransportBoundary:
        return TransportBoundary(send, pipeline, self.scheduler)

    def transition(self, payload: dict[str, object] | None = None) -> int:
        """Signal that a navigation transition completed."""

        return self.events.emit(self.config.transition_event, payload)

    def run_until_idle(self) -> int:
        return self.scheduler.run_until_idle()
