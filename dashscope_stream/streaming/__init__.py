"""Streaming layer: turns raw service events into assembled messages.

This layer handles:
- Delta extraction from raw event payloads
- Accumulation of deltas into one assistant message
- Callback registration and fan-out (message, error, complete)
- Bridging an asynchronous transport to a blocking caller
"""

from .accumulator import MessageAccumulator
from .decoder import decode_event, extract_text
from .errors import (
    ConfigurationError,
    StreamClosedError,
    StreamError,
    StreamStateError,
    StreamTimeoutError,
)
from .handler import StreamHandler
from .manager import EventKind, EventManager

__all__ = [
    "ConfigurationError",
    "EventKind",
    "EventManager",
    "MessageAccumulator",
    "StreamClosedError",
    "StreamError",
    "StreamHandler",
    "StreamStateError",
    "StreamTimeoutError",
    "decode_event",
    "extract_text",
]
