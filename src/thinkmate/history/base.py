"""Abstract base class for chat history backends.

This module defines the interface for chat session storage.
The abstraction hides:
- Storage format (JSON array in a key-value store, SQLite tables)
- Persistence mechanism
- Retention policy (optional bound on stored sessions)
"""

from abc import ABC, abstractmethod

from .models import ChatSession, ChatSessionPreview


class ChatHistoryStore(ABC):
    """Abstract chat history backend.

    Stores whole sessions keyed by id. Saving an existing id replaces it.
    When max_sessions is set, the oldest sessions beyond the bound are
    evicted on save.
    """

    def __init__(self, max_sessions: int | None = None):
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._max_sessions = max_sessions

    @property
    def max_sessions(self) -> int | None:
        return self._max_sessions

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the history backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the history backend gracefully."""

    @abstractmethod
    async def save_session(self, session: ChatSession) -> None:
        """Insert or replace a session, then apply retention."""

    @abstractmethod
    async def get_session(self, session_id: str) -> ChatSession | None:
        """Retrieve a session by id."""

    @abstractmethod
    async def list_sessions(self) -> list[ChatSession]:
        """Return all stored sessions, oldest first."""

    @abstractmethod
    async def delete_session(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every stored session."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def list_previews(self) -> list[ChatSessionPreview]:
        """Return session previews, newest first."""
        sessions = await self.list_sessions()
        return [session.preview() for session in reversed(sessions)]

    async def __aenter__(self) -> "ChatHistoryStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
