# attendance_agent/models/conversation.py
import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

TITLE_MAX_CHARS = 40
TITLE_ELLIPSIS = "..."


class MessageSender(str, Enum):
    USER = "user"
    AGENT = "agent"


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: MessageSender
    text: str
    id: Optional[str] = None


class Conversation(BaseModel):
    id: str
    title: str
    messages: List[ChatTurn] = Field(default_factory=list)

    @classmethod
    def start(cls, first_input: str, seed: List[ChatTurn]) -> "Conversation":
        """Create a conversation titled after the user's first input"""
        return cls(
            id=new_conversation_id(),
            title=make_title(first_input),
            messages=list(seed),
        )


def make_title(text: str) -> str:
    if len(text) > TITLE_MAX_CHARS:
        return text[:TITLE_MAX_CHARS] + TITLE_ELLIPSIS
    return text


def new_conversation_id() -> str:
    # Millisecond creation time; rapid submissions may collide.
    return str(int(time.time() * 1000))


# The persisted store is a bare JSON array, most recent conversation first
ConversationStore = TypeAdapter(List[Conversation])
