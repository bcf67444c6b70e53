"""Test configuration and fixtures."""

from collections.abc import Iterator

import pytest

from promise_relay.core.config import RelayConfig
from promise_relay.navigation.events import EventStream
from promise_relay.promises.deferred import set_unhandled_rejection_reporting
from promise_relay.scheduling.scheduler import TurnScheduler


@pytest.fixture
def scheduler() -> TurnScheduler:
    """Provide a fresh scheduler, drained explicitly by each test."""
    return TurnScheduler(max_turns=100)


@pytest.fixture
def events() -> EventStream:
    """Provide an empty event stream."""
    return EventStream()


@pytest.fixture
def relay_config() -> RelayConfig:
    """Provide a test relay configuration that ignores any local .env."""
    return RelayConfig(
        _env_file=None,
        log_level="DEBUG",
        json_logs=True,
        debug=True,
        max_drain_turns=100,
    )


@pytest.fixture(autouse=True)
def _restore_unhandled_reporting() -> Iterator[None]:
    yield
    set_unhandled_rejection_reporting(True)
