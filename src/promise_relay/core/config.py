"""Configuration for the promise-relay runtime.

Configuration is loaded from:
- environment variables (prefix `PROMISE_RELAY_`)
- and a local `.env` file (if present)

Pydantic-settings supports overriding the env file in tests via
`RelayConfig(_env_file=path_to_env)`.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class RelayConfig(BaseSettings):
    """Settings for the relay runtime.

    Environment variables:
    - PROMISE_RELAY_LOG_LEVEL
    - PROMISE_RELAY_JSON_LOGS
    - PROMISE_RELAY_DEBUG
    - PROMISE_RELAY_REPORT_UNHANDLED_REJECTIONS
    - PROMISE_RELAY_MAX_DRAIN_TURNS
    - PROMISE_RELAY_TRANSITION_EVENT
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    json_logs: bool = Field(
        default=True,
        description="Emit structured JSON log lines instead of plain text",
    )
    debug: bool = Field(
        default=False,
        description="Force the promise_relay logger to DEBUG",
    )

    report_unhandled_rejections: bool = Field(
        default=True,
        description=(
            "Log a warning when a promise rejects and no rejection handler is "
            "attached by the end of the next scheduler turn. Diagnostic only."
        ),
    )
    max_drain_turns: int = Field(
        default=10_000,
        gt=0,
        description="Upper bound on scheduler turns per run_until_idle() call",
    )

    transition_event: str = Field(
        default="transition_completed",
        min_length=1,
        description="Event name the flash queue advances on",
    )

    model_config = SettingsConfigDict(
        env_prefix="PROMISE_RELAY_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level
