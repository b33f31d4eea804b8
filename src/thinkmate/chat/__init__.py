"""Chat view-model."""

from .controller import (
    CONNECTION_ERROR_TEXT,
    SAMPLE_QUESTIONS,
    VOICE_PLACEHOLDER_TEXT,
    WELCOME_TEXT,
    ChatController,
)

__all__ = [
    "CONNECTION_ERROR_TEXT",
    "ChatController",
    "SAMPLE_QUESTIONS",
    "VOICE_PLACEHOLDER_TEXT",
    "WELCOME_TEXT",
]
