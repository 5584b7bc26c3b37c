import json
import socket
import threading
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from ..base import ProviderError, StreamSink, StreamTransport, Subscription
from ..errors import ErrorMapper
from ...config.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    SSE_ACCEPT_HEADER,
    SSE_ENABLE_HEADER,
)
from ...observability.logging import StreamLogger
from .sse import parse_sse_frames

logger = StreamLogger("transport")


def _decode_payload(data: str) -> Any:
    """JSON-decode one frame; undecodable data becomes an empty payload."""
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        logger.warning("Skipping undecodable SSE payload", size=len(data))
        return {}


def _release_hook(response: httpx.Response) -> Callable[[], None]:
    """Cancel hook that wakes a read blocked on ``response``'s connection."""
    def release() -> None:
        network_stream = response.extensions.get("network_stream")
        sock = network_stream.get_extra_info("socket") if network_stream is not None else None
        if sock is None:
            # No socket to shut down (mock or non-TCP transports)
            response.close()
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as exc:
            logger.debug("Connection already closed", error_type=type(exc).__name__)

    return release


class DashScopeTransport(StreamTransport):
    """SSE transport over httpx, delivering on a background thread.

    Each ``subscribe`` call opens its own connection on a daemon thread.
    Cancelling the returned subscription shuts the connection's socket down,
    which wakes a read blocked mid-stream, so the thread exits without
    waiting for ``read_timeout``. Nothing is delivered to the sink after
    cancellation.
    """

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        http_transport: Optional[httpx.BaseTransport] = None
    ):
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        # Swappable for httpx.MockTransport in tests
        self._http_transport = http_transport

    def subscribe(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: Any,
        sink: StreamSink
    ) -> Subscription:
        subscription = Subscription()
        thread = threading.Thread(
            target=self._run,
            args=(endpoint, dict(headers), body, sink, subscription),
            name="dashscope-stream",
            daemon=True,
        )
        thread.start()
        return subscription

    def _request_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        request_headers = dict(headers)
        request_headers.setdefault("Accept", SSE_ACCEPT_HEADER)
        request_headers.setdefault(SSE_ENABLE_HEADER, "enable")
        return request_headers

    def _run(
        self,
        endpoint: str,
        headers: Dict[str, str],
        body: Any,
        sink: StreamSink,
        subscription: Subscription
    ) -> None:
        error: Optional[BaseException] = None
        try:
            self._pump(endpoint, headers, body, sink, subscription)
        except ProviderError as exc:
            error = exc
        except httpx.HTTPError as exc:
            error = ErrorMapper.map_transport_error(exc)
        except Exception as exc:
            error = exc

        try:
            if subscription.cancelled:
                logger.debug("Subscription cancelled, dropping terminal signal")
            elif error is not None:
                logger.error("Stream transport failed", error=error)
                sink.handle_error(error)
            else:
                sink.handle_complete()
        finally:
            subscription.mark_finished()

    def _pump(
        self,
        endpoint: str,
        headers: Dict[str, str],
        body: Any,
        sink: StreamSink,
        subscription: Subscription
    ) -> None:
        timeout = httpx.Timeout(self.read_timeout, connect=self.connect_timeout)
        with httpx.Client(timeout=timeout, transport=self._http_transport) as client:
            with client.stream(
                "POST",
                endpoint,
                headers=self._request_headers(headers),
                json=body
            ) as response:
                subscription.add_cancel_hook(_release_hook(response))

                if response.status_code >= 400:
                    response.read()
                    raise ErrorMapper.map_http_error(
                        response.status_code,
                        _decode_payload(response.text) if response.text else None,
                        response.text
                    )

                logger.debug("Stream opened", status=response.status_code)
                for frame in parse_sse_frames(response.iter_lines()):
                    if subscription.cancelled:
                        return
                    payload = _decode_payload(frame.data)
                    if frame.event == "error" or (frame.status is not None and frame.status >= 400):
                        raise ErrorMapper.map_stream_error(payload, frame.status)
                    sink.handle_event(payload)
