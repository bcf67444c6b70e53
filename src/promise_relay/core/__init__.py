"""Runtime wiring and configuration."""

from promise_relay.core.config import RelayConfig
from promise_relay.core.runtime import RelayRuntime

__all__ = ["RelayConfig", "RelayRuntime"]
