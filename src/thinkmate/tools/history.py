"""History browser: previews of stored chat sessions."""

from ..history.base import ChatHistoryStore
from ..history.models import ChatSession, ChatSessionPreview


class HistoryBrowser:
    def __init__(self, history: ChatHistoryStore):
        self._history = history

    async def previews(self, limit: int | None = None) -> list[ChatSessionPreview]:
        """Session previews, newest first."""
        previews = await self._history.list_previews()
        return previews[:limit] if limit is not None else previews

    async def open(self, session_id: str) -> ChatSession | None:
        return await self._history.get_session(session_id)

    async def delete(self, session_id: str) -> bool:
        return await self._history.delete_session(session_id)
