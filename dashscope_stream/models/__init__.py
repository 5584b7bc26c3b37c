"""Data models for the streaming SDK."""

from .conversation_types import ConversationMessage, TurnRole
from .events import StreamDelta, StreamState

__all__ = [
    "ConversationMessage",
    "TurnRole",
    "StreamDelta",
    "StreamState",
]
