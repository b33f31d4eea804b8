"""Data models for chat messages and sessions.

These models define the structure of the chat log, independent of the
storage backend used.
"""

import base64
import mimetypes
from datetime import datetime
from enum import Enum
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..config import PREVIEW_SUMMARY_LENGTH


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


class Attachment(BaseModel):
    """A user-supplied file encoded for inline transmission."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Original file name")
    mime_type: str = Field(description="MIME type of the file")
    data: str = Field(description="Base64-encoded file content")

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str | None = None) -> "Attachment":
        """Build an attachment from raw bytes, guessing the MIME type from name."""
        if mime_type is None:
            mime_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return cls(name=name, mime_type=mime_type, data=base64.b64encode(data).decode("ascii"))

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "Attachment":
        """Read a file from disk into an attachment."""
        path = Path(path)
        return cls.from_bytes(path.name, path.read_bytes(), mime_type)

    def raw_bytes(self) -> bytes:
        """Decode the base64 payload."""
        return base64.b64decode(self.data)

    @property
    def kind(self) -> str:
        """Broad attachment kind: image, video, audio or document."""
        major = self.mime_type.split("/", 1)[0]
        return major if major in ("image", "video", "audio") else "document"


class Message(BaseModel):
    """A single entry in a chat session.

    Mutated only for in-place text replacement of a pending transcription.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Role
    text: str
    attachment: Attachment | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


def session_id_for(moment: datetime) -> str:
    """Derive a session id from its load time (epoch milliseconds)."""
    return str(int(moment.timestamp() * 1000))


class ChatSessionPreview(BaseModel):
    """Summary row for the history browser."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    summary: str
    message_count: int


class ChatSession(BaseModel):
    """Ordered message log for one chat session."""

    id: str = Field(default_factory=lambda: session_id_for(datetime.now()))
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[Message] = Field(default_factory=list)

    def preview(self, summary_length: int = PREVIEW_SUMMARY_LENGTH) -> ChatSessionPreview:
        """Build the history-browser preview for this session.

        Sessions with only the welcome message (or nothing) read "Empty Chat".
        """
        if len(self.messages) > 1:
            summary = self.messages[-1].text[:summary_length] + "..."
        else:
            summary = "Empty Chat"
        return ChatSessionPreview(
            id=self.id,
            timestamp=self.timestamp,
            summary=summary,
            message_count=len(self.messages),
        )
