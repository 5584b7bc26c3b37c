"""
DashScope Stream SDK - blocking consumer for streamed text-generation output.

This package turns the Server-Sent-Event deltas of a generative text service
into live callback notifications and a final list of completed messages:

- StreamHandler: one-shot, chainable callbacks, blocking ``stream()``
- DashScopeTransport: httpx SSE transport running on a background thread
- DashScopeClient: per-request handlers with credentials from the environment
"""

__version__ = "0.1.0"

from .api.client import DashScopeClient
from .config.settings import StreamSettings, load_settings
from .models.conversation_types import ConversationMessage, TurnRole
from .models.events import StreamState
from .providers.base import ProviderError, StreamTransport, Subscription
from .providers.dashscope import DashScopeTransport, build_request_body
from .streaming import (
    EventManager,
    MessageAccumulator,
    StreamError,
    StreamHandler,
    StreamStateError,
    StreamTimeoutError,
    decode_event,
)

__all__ = [
    # Main client
    "DashScopeClient",
    "StreamHandler",

    # Streaming components
    "EventManager",
    "MessageAccumulator",
    "decode_event",

    # Transport
    "DashScopeTransport",
    "StreamTransport",
    "Subscription",
    "build_request_body",

    # Configuration
    "StreamSettings",
    "load_settings",

    # Models
    "ConversationMessage",
    "TurnRole",
    "StreamState",

    # Errors
    "ProviderError",
    "StreamError",
    "StreamStateError",
    "StreamTimeoutError",
]
