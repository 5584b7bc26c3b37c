"""Logging helpers for the streaming SDK."""

from .logging import StreamLogger, new_stream_id

__all__ = ["StreamLogger", "new_stream_id"]
