"""
Base Stream Transport Interface

This module defines the contract between a stream handler and the transport
that delivers events to it. A transport owns the network connection and its
execution context; the handler only ever sees decoded payloads and exactly one
terminal signal.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Protocol
import threading


class StreamSink(Protocol):
    """Receiver of transport callbacks (implemented by StreamHandler)."""

    def handle_event(self, raw_event: Any) -> None:
        ...

    def handle_error(self, error: BaseException) -> None:
        ...

    def handle_complete(self) -> None:
        ...


class Subscription:
    """
    Handle to one open transport subscription.

    ``cancel`` asks the producer to stop and release its connection. After
    cancellation the producer must not deliver anything further to the sink.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._finished = threading.Event()
        self._on_cancel = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def add_cancel_hook(self, hook) -> None:
        """Register a callable run once when the subscription is cancelled."""
        self._on_cancel.append(hook)
        if self.cancelled:
            hook()

    def cancel(self) -> None:
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        for hook in list(self._on_cancel):
            hook()

    def mark_finished(self) -> None:
        self._finished.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the producer to stop; returns True if it did."""
        return self._finished.wait(timeout)


class StreamTransport(ABC):
    """
    Abstract base class for event-stream transports.

    Implementations deliver, on their own execution context, an ordered
    sequence of ``sink.handle_event`` calls followed by exactly one of
    ``sink.handle_complete`` or ``sink.handle_error``. Retrying a dropped
    connection, if desired, is the transport's concern.
    """

    @abstractmethod
    def subscribe(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Any,
        sink: StreamSink
    ) -> Subscription:
        """
        Open the stream and start delivering to ``sink``.

        Args:
            endpoint: Endpoint URL
            headers: Request headers (auth, content type)
            body: Request body; JSON-serializable
            sink: Receiver of events and the terminal signal

        Returns:
            Subscription used to cancel delivery
        """
        pass


class ProviderError(Exception):
    """
    Base exception for transport and service errors.

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
        code: Service error code (e.g., "InvalidParameter") if reported
        request_id: Service request id if reported
        is_retryable: Whether a retry could plausibly succeed
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.code = code
        self.request_id = request_id
        self.is_retryable = False  # Set by ErrorMapper
        self.original_error = None  # Set by ErrorMapper when wrapping
