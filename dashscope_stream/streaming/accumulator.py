"""Accumulation of text deltas into a single assistant message."""

from typing import List, Optional
import logging

from .errors import StreamClosedError
from ..models.conversation_types import ConversationMessage, TurnRole
from ..models.events import StreamDelta

logger = logging.getLogger(__name__)


class MessageAccumulator:
    """Owns the in-progress message of one stream.

    The first delta creates an assistant message; every later delta is
    appended to it. Content never shrinks. ``finalize`` moves the message
    into the completed list when it has content.
    """

    def __init__(self, role: TurnRole = TurnRole.ASSISTANT):
        self.role = role
        self._parts: List[str] = []
        self._started = False
        self._completed: Optional[List[ConversationMessage]] = None
        self.chunk_count = 0

    @property
    def finalized(self) -> bool:
        return self._completed is not None

    @property
    def content(self) -> str:
        return "".join(self._parts)

    @property
    def current(self) -> Optional[ConversationMessage]:
        """Snapshot of the in-progress message, or None before the first delta."""
        if not self._started:
            return None
        return ConversationMessage(role=self.role, content=self.content)

    def apply(self, delta: StreamDelta) -> ConversationMessage:
        """Append one delta and return a snapshot of the updated message."""
        if self.finalized:
            raise StreamClosedError("Cannot apply a delta to a finalized stream")

        self._started = True
        self._parts.append(delta.text)
        self.chunk_count += 1
        return ConversationMessage(role=self.role, content=self.content)

    def finalize(self) -> List[ConversationMessage]:
        """Close the accumulator and return the completed messages.

        Repeated calls return a copy of the first result.
        """
        if self._completed is None:
            current = self.current
            if current is not None and current.content:
                self._completed = [current]
            else:
                self._completed = []
            logger.debug(
                f"Accumulator finalized: chunks={self.chunk_count} "
                f"chars={len(self.content)} messages={len(self._completed)}"
            )
        return list(self._completed)
