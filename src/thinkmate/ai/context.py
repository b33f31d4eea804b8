"""Conversation context window for chat requests.

The provider receives a single user turn; prior turns are flattened into a
text preamble limited to the most recent messages, each truncated.
"""

from collections.abc import Sequence

from ..config import CONTEXT_PREVIEW_LENGTH, CONTEXT_WINDOW_MESSAGES
from ..history.models import Message, Role


def _speaker(message: Message) -> str:
    return "Student" if message.role == Role.USER else "ThinkMate"


def format_turn(message: Message, preview_length: int = CONTEXT_PREVIEW_LENGTH) -> str:
    """Render one prior message as a context line."""
    text = message.text
    if len(text) > preview_length:
        text = text[:preview_length] + "..."
    line = f"{_speaker(message)}: {text}"
    if message.attachment is not None:
        line += f" [Attached: {message.attachment.name}]"
    return line


def build_context_prompt(
    history: Sequence[Message],
    window: int = CONTEXT_WINDOW_MESSAGES,
    preview_length: int = CONTEXT_PREVIEW_LENGTH,
) -> str:
    """Build the preamble prepended to the current request.

    Args:
        history: Prior messages, oldest first
        window: Number of trailing messages to include
        preview_length: Character limit per message

    Returns:
        Preamble ending with "Current Request:\\n", or "" without history
    """
    if not history or window <= 0:
        return ""
    lines = [format_turn(m, preview_length) for m in list(history)[-window:]]
    return "Previous Conversation:\n" + "\n".join(lines) + "\n\nCurrent Request:\n"
