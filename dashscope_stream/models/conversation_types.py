from pydantic import BaseModel, ConfigDict
from typing import Dict
from enum import Enum


class TurnRole(str, Enum):
    """Conversation turn roles."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ConversationMessage(BaseModel):
    """Immutable role/content message.

    Instances are frozen so a snapshot handed to a callback keeps the value
    it had when it was emitted.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    role: TurnRole
    content: str

    def to_payload(self) -> Dict[str, str]:
        """Render the message in request-body form."""
        return {"role": self.role.value, "content": self.content}
