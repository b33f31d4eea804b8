"""Chat view-model.

Holds the ordered message list, the pending-request flag and at most one
pending attachment. Drives the AI service and persists the session to the
history store after every change to the message list.
"""

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..ai.base import AIService
from ..errors import ThinkMateError
from ..history.base import ChatHistoryStore
from ..history.models import Attachment, ChatSession, Message, Role, session_id_for

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "👋 Hi! I'm ThinkMate. Ask me anything, upload a PDF/Image, or send a voice note!"
)
CONNECTION_ERROR_TEXT = "Sorry, I encountered a connection error. Please try again."
VOICE_PLACEHOLDER_TEXT = "🎤 Audio Message..."

SAMPLE_QUESTIONS = [
    "Explain Photosynthesis like I'm 10",
    "Summarize the French Revolution",
    "Help me solve a quadratic equation",
    "Create a quiz for Biology Chapter 1",
    "How do I balance study and sports?",
]


class ChatController:
    """View-model for one chat session.

    Example:
        chat = ChatController(service, history)
        chat.attach_file("notes.pdf")
        reply = await chat.send_message("Summarize this for me")
    """

    def __init__(
        self,
        ai: AIService,
        history: ChatHistoryStore | None = None,
        session_id: str | None = None,
        welcome: bool = True,
    ):
        self._ai = ai
        self._history = history
        self._created_at = datetime.now()
        self._session_id = session_id or session_id_for(self._created_at)
        self._messages: list[Message] = []
        self._attachment: Attachment | None = None
        self._is_loading = False
        self._listeners: list[Callable[[list[Message]], None]] = []
        if welcome:
            self._messages.append(Message(role=Role.MODEL, text=WELCOME_TEXT))

    @classmethod
    def resume(
        cls,
        ai: AIService,
        session: ChatSession,
        history: ChatHistoryStore | None = None,
    ) -> "ChatController":
        """Continue a stored session under its original id."""
        controller = cls(ai, history, session_id=session.id, welcome=False)
        controller._messages = list(session.messages)
        return controller

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def attachment(self) -> Attachment | None:
        return self._attachment

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def session(self) -> ChatSession:
        """Snapshot of the current session."""
        return ChatSession(
            id=self._session_id,
            timestamp=datetime.now(),
            messages=[m.model_copy() for m in self._messages],
        )

    def subscribe(self, listener: Callable[[list[Message]], None]) -> None:
        """Register a callback invoked with the messages after each change."""
        self._listeners.append(listener)

    def find_message(self, message_id: str) -> Message | None:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    def last_reply(self) -> Message | None:
        """Most recent model message."""
        for message in reversed(self._messages):
            if message.role == Role.MODEL:
                return message
        return None

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def attach(self, attachment: Attachment) -> None:
        """Set the pending attachment, replacing any previous one."""
        self._attachment = attachment

    def attach_file(self, path: str | Path, mime_type: str | None = None) -> Attachment:
        attachment = Attachment.from_path(path, mime_type)
        self.attach(attachment)
        return attachment

    def clear_attachment(self) -> None:
        self._attachment = None

    # ------------------------------------------------------------------
    # Message flow
    # ------------------------------------------------------------------

    async def _changed(self) -> None:
        for listener in self._listeners:
            listener(self.messages)
        await self.persist()

    async def _append(self, message: Message) -> Message:
        self._messages.append(message)
        await self._changed()
        return message

    async def persist(self) -> None:
        """Save the session to the history store (best-effort)."""
        if self._history is None:
            return
        try:
            await self._history.save_session(self.session)
        except (ThinkMateError, OSError, RuntimeError, sqlite3.Error) as e:
            logger.error("Could not save chat session %s: %s", self._session_id, e)

    async def _reply(self, text: str, history: list[Message], attachment: Attachment | None) -> Message:
        try:
            reply = await self._ai.chat(text, history, attachment)
        except ThinkMateError as e:
            logger.error("Chat request failed: %s", e)
            return await self._append(Message(role=Role.SYSTEM, text=CONNECTION_ERROR_TEXT))
        return await self._append(Message(role=Role.MODEL, text=reply))

    async def send_message(self, text: str | None = None) -> Message | None:
        """Send a message (and any pending attachment) to the tutor.

        No-op when the text is blank and nothing is attached, or while a
        request is pending.

        Args:
            text: Message text

        Returns:
            The appended model or system message, or None for a no-op
        """
        text = text or ""
        if (not text.strip() and self._attachment is None) or self._is_loading:
            return None

        prior = list(self._messages)
        attachment = self._attachment
        self._attachment = None
        self._is_loading = True
        try:
            await self._append(Message(role=Role.USER, text=text, attachment=attachment))
            return await self._reply(text, prior, attachment)
        finally:
            self._is_loading = False

    async def send_voice_note(self, audio: bytes, mime_type: str = "audio/wav") -> Message | None:
        """Transcribe a voice note and send the transcription.

        A placeholder user message is shown while transcribing, then its text
        is replaced in place with the transcription.

        Returns:
            The reply message, or None when nothing was transcribed
        """
        if self._is_loading:
            return None

        prior = list(self._messages)
        self._is_loading = True
        try:
            placeholder = await self._append(Message(role=Role.USER, text=VOICE_PLACEHOLDER_TEXT))
            transcription = (await self._ai.transcribe_audio(audio, mime_type)).strip()
            placeholder.text = f'🎤 "{transcription}"'
            await self._changed()
            if not transcription:
                return None
            return await self._reply(transcription, prior, None)
        finally:
            self._is_loading = False

    async def read_aloud(self, message_id: str) -> bytes | None:
        """Synthesize speech for a message.

        Returns:
            Raw PCM audio, or None if the message is unknown or TTS failed
        """
        message = self.find_message(message_id)
        if message is None or self._is_loading:
            return None
        self._is_loading = True
        try:
            return await self._ai.generate_speech(message.text)
        finally:
            self._is_loading = False
