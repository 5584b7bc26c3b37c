"""DashScope text-generation streaming transport."""

from .payloads import build_request_body, format_messages
from .sse import SseFrame, parse_sse_frames
from .transport import DashScopeTransport

__all__ = [
    "DashScopeTransport",
    "SseFrame",
    "build_request_body",
    "format_messages",
    "parse_sse_frames",
]
