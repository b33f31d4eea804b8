"""Chat history module for ThinkMate.

Provides the message/session data model and persistent session storage.
"""

from .base import ChatHistoryStore
from .factory import create_chat_history
from .keyvalue import KeyValueChatHistory
from .models import (
    Attachment,
    ChatSession,
    ChatSessionPreview,
    Message,
    Role,
    session_id_for,
)

__all__ = [
    "Attachment",
    "ChatHistoryStore",
    "ChatSession",
    "ChatSessionPreview",
    "KeyValueChatHistory",
    "Message",
    "Role",
    "create_chat_history",
    "session_id_for",
]
