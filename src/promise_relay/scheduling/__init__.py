from promise_relay.scheduling.scheduler import (
    LoopScheduler,
    Scheduler,
    TurnScheduler,
    get_default_scheduler,
    set_default_scheduler,
)

__all__ = [
    "LoopScheduler",
    "Scheduler",
    "TurnScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
]
