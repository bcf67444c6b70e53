#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates wiring the relay components the way a view layer would:

* a transport boundary with a busy indicator and an unwrap interceptor
* two independent loads combined with `wait_all`
* a flash message shown on the next navigation transition

The transport is a stand-in that answers from an in-memory table.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from promise_relay import (
    BusyTracker,
    Interceptor,
    RelayRuntime,
    RequestConfig,
    ResponseEnvelope,
)
from promise_relay.errors import Rejection

_FAKE_API: dict[str, object] = {
    "/api/user": {"name": "ada"},
    "/api/settings": {"theme": "dark"},
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="promise-relay walkthrough.")
    parser.add_argument(
        "--missing", action="store_true", help="Request an unknown URL to show the failure path"
    )
    return parser.parse_args(argv)


def _send(config: RequestConfig) -> ResponseEnvelope:
    if config.url in _FAKE_API:
        return ResponseEnvelope(data=_FAKE_API[config.url], status=200, request_config=config)
    raise Rejection(ResponseEnvelope(data=None, status=404, request_config=config))


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    runtime = RelayRuntime()
    busy = BusyTracker(on_change=lambda state: print(f"busy={state}"))
    pipeline = (
        runtime.pipeline()
        .add(busy.interceptor())
        .add(Interceptor(on_success=lambda envelope: envelope.data, name="unwrap"))
        .build()
    )
    http = runtime.boundary(_send, pipeline)

    settings_url = "/api/missing" if args.missing else "/api/settings"
    loaded = runtime.wait_all({"user": http.get("/api/user"), "settings": http.get(settings_url)})

    def on_loaded(page: dict[str, object]) -> None:
        print(f"Loaded: {page}")
        runtime.flash.enqueue("Profile loaded")

    def on_failed(reason: ResponseEnvelope) -> None:
        print(f"Failed with status {reason.status}")
        runtime.flash.enqueue("Could not load your profile")

    loaded.then(on_loaded, on_failed)
    runtime.run_until_idle()

    runtime.transition()
    print(f"Flash: {runtime.flash.current_message()!r}")
    runtime.transition()
    print(f"Flash after next transition: {runtime.flash.current_message()!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
