"""Delta extraction from raw service events.

Services may interleave heartbeat or metadata-only events with content
events, so anything that does not carry a string at ``output.text`` decodes
to ``None`` rather than raising.
"""

from collections.abc import Mapping
from typing import Any, Optional

from ..models.events import StreamDelta


def extract_text(raw_event: Any) -> Optional[str]:
    """Return the string at ``output.text`` or None when the path is absent."""
    if not isinstance(raw_event, Mapping):
        return None
    output = raw_event.get("output")
    if not isinstance(output, Mapping):
        return None
    text = output.get("text")
    if isinstance(text, str):
        return text
    return None


def decode_event(raw_event: Any) -> Optional[StreamDelta]:
    """Decode one raw event into a delta.

    Args:
        raw_event: JSON-decoded event payload (normally a dict)

    Returns:
        StreamDelta when the event carries non-empty text, otherwise None
    """
    text = extract_text(raw_event)
    if not text:
        return None
    return StreamDelta(text=text, raw_event=raw_event)
