"""Key-value chat history backend.

Stores every session as one JSON array under a single key of a
KeyValueStore, the local equivalent of browser storage.
"""

import logging

from pydantic import ValidationError

from ..config import HISTORY_KEY
from ..storage import KeyValueStore
from .base import ChatHistoryStore
from .models import ChatSession

logger = logging.getLogger(__name__)


class KeyValueChatHistory(ChatHistoryStore):
    """Chat history kept as a JSON array in a key-value store.

    Insertion order is preserved: updating a session keeps its position.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = HISTORY_KEY,
        max_sessions: int | None = None,
    ):
        super().__init__(max_sessions)
        self._store = store
        self._key = key

    async def connect(self) -> None:
        """No-op; the store is ready on construction."""
        pass

    async def disconnect(self) -> None:
        """No-op; writes are flushed by the store."""
        pass

    def _read(self) -> list[ChatSession]:
        raw = self._store.get_json(self._key)
        if not isinstance(raw, list):
            return []
        sessions = []
        for item in raw:
            try:
                sessions.append(ChatSession.model_validate(item))
            except ValidationError:
                logger.warning("Skipping unreadable chat session in history")
        return sessions

    def _write(self, sessions: list[ChatSession]) -> None:
        self._store.set_json(self._key, [s.model_dump(mode="json") for s in sessions])

    async def save_session(self, session: ChatSession) -> None:
        sessions = self._read()
        for i, existing in enumerate(sessions):
            if existing.id == session.id:
                sessions[i] = session
                break
        else:
            sessions.append(session)

        if self._max_sessions is not None and len(sessions) > self._max_sessions:
            keep = sorted(sessions, key=lambda s: s.timestamp)[-self._max_sessions:]
            keep_ids = {s.id for s in keep}
            evicted = len(sessions) - len(keep_ids)
            sessions = [s for s in sessions if s.id in keep_ids]
            logger.debug("Evicted %d old chat session(s)", evicted)

        self._write(sessions)

    async def get_session(self, session_id: str) -> ChatSession | None:
        for session in self._read():
            if session.id == session_id:
                return session
        return None

    async def list_sessions(self) -> list[ChatSession]:
        return self._read()

    async def delete_session(self, session_id: str) -> bool:
        sessions = self._read()
        remaining = [s for s in sessions if s.id != session_id]
        if len(remaining) == len(sessions):
            return False
        self._write(remaining)
        return True

    async def clear(self) -> None:
        self._store.remove(self._key)

    @property
    def backend_type(self) -> str:
        return "keyvalue"
