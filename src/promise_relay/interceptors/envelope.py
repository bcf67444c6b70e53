"""Records exchanged with the transport collaborator."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Description of one outbound call, handed to the transport."""

    method: str
    url: str
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("RequestConfig.url must not be empty")
        object.__setattr__(self, "method", self.method.upper())

    def with_updates(self, **changes: Any) -> RequestConfig:
        return dataclasses.replace(self, **changes)

    def with_header(self, name: str, value: str) -> RequestConfig:
        return self.with_updates(headers={**self.headers, name: value})


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    """What a transport call settles with, on success and on failure alike."""

    data: Any
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    request_config: RequestConfig | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def with_data(self, data: Any) -> ResponseEnvelope:
        return dataclasses.replace(self, data=data)
