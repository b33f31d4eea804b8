"""Factory for creating chat history backends."""

from typing import Any

from .base import ChatHistoryStore


def create_chat_history(
    backend: str = "keyvalue",
    **kwargs: Any
) -> ChatHistoryStore:
    """Create a chat history backend.

    Args:
        backend: Backend type ("keyvalue" or "sqlite")
        **kwargs: Backend-specific configuration
            For keyvalue:
                - store: KeyValueStore (required)
                - key: str (default: thinkmate_chat_history)
                - max_sessions: int | None
            For sqlite:
                - path: str | Path (default: ./thinkmate_history.db)
                - max_sessions: int | None

    Returns:
        ChatHistoryStore instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    if backend == "keyvalue":
        if "store" not in kwargs:
            raise TypeError("keyvalue history backend requires 'store' in config")
        from .keyvalue import KeyValueChatHistory
        return KeyValueChatHistory(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteChatHistory
        return SQLiteChatHistory(**kwargs)

    raise ValueError(
        f"Unsupported history backend: {backend}. "
        f"Supported backends: keyvalue, sqlite"
    )
