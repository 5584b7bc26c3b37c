"""Transports that deliver service events to stream handlers."""

from .base import ProviderError, StreamSink, StreamTransport, Subscription
from .errors import ErrorMapper
from .dashscope import DashScopeTransport, build_request_body

__all__ = [
    "DashScopeTransport",
    "ErrorMapper",
    "ProviderError",
    "StreamSink",
    "StreamTransport",
    "Subscription",
    "build_request_body",
]
