"""
Structured logging utility for stream handlers and transports.

This module provides a consistent logging interface so every stream log line
carries the same structured fields (provider, model, stream_id).
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Optional


class StreamLogger:
    """Structured logger for one component of the streaming stack."""

    def __init__(self, component: str, provider: str = "dashscope"):
        """
        Initialize logger for a component.

        Args:
            component: Short component name (e.g., "handler", "transport")
            provider: Name of the upstream service
        """
        self.provider = provider
        self.logger = logging.getLogger(f"dashscope_stream.{component}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, stream_id: Optional[str] = None, **kwargs):
        """Log debug message with structured fields."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, stream_id=stream_id, **kwargs))

    def info(self, message: str, stream_id: Optional[str] = None, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(self._format_message(message, stream_id=stream_id, **kwargs))

    def warning(self, message: str, stream_id: Optional[str] = None, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(self._format_message(message, stream_id=stream_id, **kwargs))

    def error(self, message: str, stream_id: Optional[str] = None,
              error: Optional[BaseException] = None, **kwargs):
        """Log error message with structured fields."""
        if error is not None:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, stream_id=stream_id, **kwargs))

    @contextmanager
    def track_stream(self, model: Optional[str] = None, stream_id: Optional[str] = None):
        """
        Context manager timing one blocking stream call.

        Args:
            model: Model named in the request body, if any
            stream_id: Optional stream ID (generated if not provided)

        Yields:
            Dict with stream metadata including stream_id
        """
        if stream_id is None:
            stream_id = new_stream_id()

        start_time = time.time()
        self.debug("Opening stream", stream_id=stream_id, model=model)

        metadata = {
            'stream_id': stream_id,
            'model': model,
            'start_time': start_time
        }

        try:
            yield metadata
        finally:
            duration = time.time() - start_time
            metadata['duration_ms'] = int(duration * 1000)
            self.debug(
                "Stream call returned",
                stream_id=stream_id,
                model=model,
                duration_ms=metadata['duration_ms']
            )

    def log_stream_metrics(self, chunks: int, total_chars: int, duration: float,
                           stream_id: str, model: Optional[str] = None):
        """Log streaming performance metrics."""
        chars_per_second = total_chars / duration if duration > 0 else 0

        self.info(
            "Streaming metrics",
            stream_id=stream_id,
            model=model,
            chunks=chunks,
            total_chars=total_chars,
            duration_ms=int(duration * 1000),
            chars_per_second=int(chars_per_second)
        )


def new_stream_id() -> str:
    return str(uuid.uuid4())[:8]
