"""Interceptors applied around the transport collaborator."""

from promise_relay.interceptors.busy import BusyTracker
from promise_relay.interceptors.envelope import RequestConfig, ResponseEnvelope
from promise_relay.interceptors.pipeline import (
    Interceptor,
    InterceptorPipeline,
    PipelineBuilder,
    TransportBoundary,
)

__all__ = [
    "BusyTracker",
    "Interceptor",
    "InterceptorPipeline",
    "PipelineBuilder",
    "RequestConfig",
    "ResponseEnvelope",
    "TransportBoundary",
]
