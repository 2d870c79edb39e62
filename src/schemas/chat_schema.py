"""Chat history, transcript and ``/api/chat`` wire schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One history entry sent back to the answering service as context."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class TranscriptEntry(BaseModel):
    """A line rendered in the chat panel.

    ``saved`` is False for lines that never made it into the history
    (greeting, failed user messages, fallbacks and lead confirmations).
    """

    role: ChatRole
    text: str
    saved: bool = True


class ChatMeta(BaseModel):
    history: list[ChatMessage] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    user_message: str = Field(alias="userMessage")
    page_url: str = Field(alias="pageUrl")
    meta: ChatMeta = Field(default_factory=ChatMeta)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ChatResponse(BaseModel):
    """Backend envelope for chat answers."""
    ok: bool = False
    answer: Optional[str] = None
    error: Optional[str] = None
