from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class SseFrame:
    """One dispatched Server-Sent-Event frame."""
    event: Optional[str]
    data: str
    id: Optional[str] = None
    status: Optional[int] = None


def parse_sse_frames(lines: Iterable[str]) -> Iterator[SseFrame]:
    """
    Group raw SSE lines into frames.

    Consecutive ``data:`` lines are joined with newlines and a frame is
    dispatched on a blank line. Comment lines are ignored except the
    ``:HTTP_STATUS/<code>`` comment the service sends, which is kept as
    the frame status.
    """
    event: Optional[str] = None
    frame_id: Optional[str] = None
    status: Optional[int] = None
    data_lines: List[str] = []

    def flush() -> Optional[SseFrame]:
        nonlocal event, frame_id, status, data_lines
        frame = None
        if data_lines:
            frame = SseFrame(event=event, data="\n".join(data_lines), id=frame_id, status=status)
        event, frame_id, status, data_lines = None, None, None, []
        return frame

    for line in lines:
        line = line.rstrip("\r\n")
        if line == "":
            frame = flush()
            if frame is not None:
                yield frame
            continue

        if line.startswith(":"):
            comment = line[1:].strip()
            if comment.startswith("HTTP_STATUS/"):
                try:
                    status = int(comment[len("HTTP_STATUS/"):])
                except ValueError:
                    pass
            continue

        field_name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field_name == "data":
            data_lines.append(value)
        elif field_name == "event":
            event = value.strip()
        elif field_name == "id":
            frame_id = value.strip()

    frame = flush()
    if frame is not None:
        yield frame
