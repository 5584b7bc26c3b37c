"""Event models for streaming responses.

This module defines the typed values that flow through the streaming
pipeline: the handler lifecycle and decoded deltas.
"""

from typing import Optional, Any
from dataclasses import dataclass, field
from enum import Enum


class StreamState(str, Enum):
    """Lifecycle of a single stream handler."""
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELLED)


@dataclass(frozen=True)
class StreamDelta:
    """A text fragment extracted from one raw event.

    Attributes:
        text: The fragment to append to the message being assembled
        raw_event: Original event payload for debugging
    """
    text: str
    raw_event: Optional[Any] = field(default=None, compare=False, repr=False)


