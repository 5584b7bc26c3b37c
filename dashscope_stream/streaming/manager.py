from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Union
import threading

from ..models.conversation_types import ConversationMessage


MessageCallback = Callable[[ConversationMessage], None]
ErrorCallback = Callable[[BaseException], None]
CompleteCallback = Callable[[], None]


class EventKind(str, Enum):
    """Notification kinds a stream emits."""
    MESSAGE = "message"
    ERROR = "error"
    COMPLETE = "complete"


class EventManager:
    """Registry of synchronous stream callbacks.

    Callbacks are invoked in registration order on the thread that emits.
    Exceptions raised by a callback are not caught here; they propagate to
    whoever called ``emit``. Emitting a kind with no registrations is a no-op.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[EventKind, List[Callable[..., Any]]] = {
            kind: [] for kind in EventKind
        }
        self._lock = threading.Lock()

    def register(self, kind: Union[EventKind, str], fn: Callable[..., Any]) -> "EventManager":
        """Append a callback for ``kind`` and return the manager for chaining."""
        kind = EventKind(kind)
        if not callable(fn):
            raise TypeError(f"Callback for {kind.value} events must be callable, got {type(fn).__name__}")
        with self._lock:
            self._callbacks[kind].append(fn)
        return self

    def on_message(self, fn: MessageCallback) -> "EventManager":
        return self.register(EventKind.MESSAGE, fn)

    def on_error(self, fn: ErrorCallback) -> "EventManager":
        return self.register(EventKind.ERROR, fn)

    def on_complete(self, fn: CompleteCallback) -> "EventManager":
        return self.register(EventKind.COMPLETE, fn)

    def count(self, kind: Union[EventKind, str]) -> int:
        with self._lock:
            return len(self._callbacks[EventKind(kind)])

    def emit(self, kind: Union[EventKind, str], *payload: Any) -> None:
        """Invoke every callback registered for ``kind`` with ``payload``."""
        with self._lock:
            callbacks = list(self._callbacks[EventKind(kind)])
        for callback in callbacks:
            callback(*payload)

    def emit_message(self, message: ConversationMessage) -> None:
        """Emit a message snapshot."""
        self.emit(EventKind.MESSAGE, message)

    def emit_error(self, error: BaseException) -> None:
        """Emit a stream failure."""
        self.emit(EventKind.ERROR, error)

    def emit_complete(self) -> None:
        """Emit clean completion."""
        self.emit(EventKind.COMPLETE)
