"""
Blocking stream handler over an asynchronous event transport.

A ``StreamHandler`` is bound to one request. The transport pushes events to
it from its own thread; the thread that called ``stream()`` waits on a
one-shot future that is resolved exactly once, when the stream reaches a
terminal state.
"""

from __future__ import annotations

from concurrent.futures import Future, InvalidStateError, TimeoutError as FutureTimeoutError
from typing import Any, List, Mapping, Optional
import threading
import time

from .accumulator import MessageAccumulator
from .decoder import decode_event
from .errors import StreamStateError, StreamTimeoutError
from .manager import CompleteCallback, ErrorCallback, EventManager, MessageCallback
from ..models.conversation_types import ConversationMessage
from ..models.events import StreamState
from ..observability.logging import StreamLogger, new_stream_id
from ..providers.base import StreamTransport, Subscription

logger = StreamLogger("handler")

CANCEL_LOCK_TIMEOUT = 1.0


class StreamHandler:
    """
    One-shot consumer of a chunked text-generation stream.

    Usage::

        handler = StreamHandler(endpoint, headers)
        messages = (
            handler
            .on_message(lambda msg: print(msg.content))
            .on_error(lambda exc: print("failed:", exc))
            .stream(body, timeout=60)
        )

    Callbacks must be registered before ``stream()`` is called. They run on
    the transport's delivery thread, in registration order.

    ``stream()`` returns the completed messages, or an empty list when the
    stream failed; check ``error`` (or an ``on_error`` callback) to tell an
    empty success from a failure.
    """

    def __init__(
        self,
        endpoint: str,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[StreamTransport] = None
    ):
        self.endpoint = endpoint
        self.headers = dict(headers or {})
        self.stream_id = new_stream_id()
        self._transport = transport
        self._events = EventManager()
        self._accumulator = MessageAccumulator()
        self._state = StreamState.IDLE
        self._error: Optional[BaseException] = None
        self._result: "Future[List[ConversationMessage]]" = Future()
        self._subscription: Optional[Subscription] = None
        self._started_at: Optional[float] = None
        self._model: Optional[str] = None
        # Re-entrant so a callback may signal the handler from inside delivery
        self._lock = threading.RLock()

    @property
    def transport(self) -> StreamTransport:
        """Transport used by ``stream()``; an httpx SSE transport by default."""
        if self._transport is None:
            from ..providers.dashscope.transport import DashScopeTransport
            self._transport = DashScopeTransport()
        return self._transport

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        """Cause of failure, or None if the stream has not failed."""
        return self._error

    @property
    def messages(self) -> List[ConversationMessage]:
        """Result of the stream once terminal; empty before that."""
        if not self._result.done():
            return []
        return list(self._result.result())

    # Registration

    def on_message(self, fn: MessageCallback) -> "StreamHandler":
        """Call ``fn(message)`` with a snapshot each time content grows."""
        self._events.on_message(fn)
        return self

    def on_error(self, fn: ErrorCallback) -> "StreamHandler":
        """Call ``fn(error)`` once if the stream fails."""
        self._events.on_error(fn)
        return self

    def on_complete(self, fn: CompleteCallback) -> "StreamHandler":
        """Call ``fn()`` once when the stream completes cleanly."""
        self._events.on_complete(fn)
        return self

    # Blocking entry point

    def stream(self, request_body: Any, timeout: Optional[float] = None) -> List[ConversationMessage]:
        """
        Open the stream and block until it completes or fails.

        Args:
            request_body: JSON-serializable request body
            timeout: Maximum seconds to wait; None waits for a terminal signal

        Returns:
            The completed messages; an empty list on failure or when the
            stream produced no content

        Raises:
            StreamStateError: If this handler was already used
            StreamTimeoutError: If ``timeout`` elapsed first; the
                subscription is cancelled and no error callback fires. Also
                raised when completion or error callbacks are still running
                shortly after the deadline
        """
        with self._lock:
            if self._state is not StreamState.IDLE:
                raise StreamStateError(
                    f"StreamHandler is single-use; current state is {self._state.value}"
                )
            self._state = StreamState.STREAMING
            self._started_at = time.time()
            if isinstance(request_body, Mapping):
                self._model = request_body.get("model")

        with logger.track_stream(model=self._model, stream_id=self.stream_id):
            try:
                subscription = self.transport.subscribe(
                    self.endpoint, self.headers, request_body, self
                )
            except Exception as exc:
                self.handle_error(exc)
                return list(self._result.result())

            self._subscription = subscription

            try:
                return list(self._result.result(timeout=timeout))
            except FutureTimeoutError:
                if not self._cancel(timeout):
                    # Finished at the deadline; its callbacks may still be running
                    try:
                        return list(self._result.result(timeout=CANCEL_LOCK_TIMEOUT))
                    except FutureTimeoutError:
                        logger.warning("Terminal callbacks overran the deadline",
                                       stream_id=self.stream_id, timeout=timeout)
                raise StreamTimeoutError(timeout) from None

    # Delivery (called by the transport, or directly in tests)

    def handle_event(self, raw_event: Any) -> None:
        """Decode one raw event and, if it carries text, emit the updated message."""
        with self._lock:
            if self._closed():
                logger.debug("Ignoring event after terminal state", stream_id=self.stream_id,
                             state=self._state.value)
                return

            delta = decode_event(raw_event)
            if delta is None:
                logger.debug("Event carried no text delta", stream_id=self.stream_id)
                return

            try:
                snapshot = self._accumulator.apply(delta)
                self._events.emit_message(snapshot)
            except Exception as exc:
                if not self._closed():
                    self._fail(exc)
                return
            # The caller may have given up while a callback held the lock
            self._closed()

    def handle_error(self, error: BaseException) -> None:
        """Terminal failure: fire error callbacks and release the caller with []."""
        with self._lock:
            if self._closed():
                logger.debug("Ignoring error after terminal state", stream_id=self.stream_id,
                             state=self._state.value, error_type=type(error).__name__)
                return
            self._fail(error)

    def handle_complete(self) -> None:
        """Terminal success: finalize, fire completion callbacks, release the caller."""
        with self._lock:
            if self._closed():
                logger.debug("Ignoring completion after terminal state", stream_id=self.stream_id,
                             state=self._state.value)
                return

            self._state = StreamState.COMPLETED
            messages = self._accumulator.finalize()
            try:
                self._events.emit_complete()
            except Exception as exc:
                self._fail(exc)
                return

            duration = time.time() - self._started_at if self._started_at else 0.0
            logger.log_stream_metrics(
                chunks=self._accumulator.chunk_count,
                total_chars=len(self._accumulator.content),
                duration=duration,
                stream_id=self.stream_id,
                model=self._model
            )
            self._settle(messages)

    # Internals; callers hold self._lock

    def _fail(self, error: BaseException) -> None:
        self._state = StreamState.FAILED
        self._error = error
        # Partial content is discarded from the result
        self._accumulator.finalize()
        logger.error("Stream failed", stream_id=self.stream_id, model=self._model, error=error)
        try:
            self._events.emit_error(error)
        except Exception as callback_error:
            logger.error("Error callback raised", stream_id=self.stream_id, error=callback_error)
        finally:
            self._settle([])

    def _settle(self, messages: List[ConversationMessage]) -> None:
        try:
            self._result.set_result(messages)
        except InvalidStateError:
            # Already settled; the first terminal transition wins
            pass

    def _closed(self) -> bool:
        """True once terminal. A cancelled subscription moves the stream to CANCELLED."""
        if (
            not self._state.is_terminal
            and self._subscription is not None
            and self._subscription.cancelled
        ):
            self._state = StreamState.CANCELLED
            self._settle([])
        return self._state.is_terminal

    def _cancel(self, timeout: Optional[float]) -> bool:
        """Abandon the stream after a caller deadline. False if it finished meanwhile."""
        # A callback stuck on the delivery thread may hold the lock indefinitely
        if self._lock.acquire(timeout=CANCEL_LOCK_TIMEOUT):
            try:
                if self._state.is_terminal:
                    return False
                self._state = StreamState.CANCELLED
                self._settle([])
            finally:
                self._lock.release()
        elif self._state.is_terminal:
            return False
        # Without the lock, the delivery thread records CANCELLED once it
        # sees the cancelled subscription

        logger.warning("Stream wait timed out, cancelling subscription",
                       stream_id=self.stream_id, timeout=timeout)
        if self._subscription is not None:
            self._subscription.cancel()
        return True
