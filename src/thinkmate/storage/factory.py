"""Factory for creating key-value stores."""

from typing import Any

from .base import KeyValueStore


def create_store(backend: str = "memory", **kwargs: Any) -> KeyValueStore:
    """Create a key-value store.

    Args:
        backend: Backend type ("memory" or "json")
        **kwargs: Backend-specific configuration
            For json:
                - path: str | Path (default: ./thinkmate_store.json)

    Returns:
        KeyValueStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryStore
        return InMemoryStore(**kwargs)

    elif backend == "json":
        from .json_file import JsonFileStore
        return JsonFileStore(**kwargs)

    raise ValueError(
        f"Unsupported store backend: {backend}. "
        f"Supported backends: memory, json"
    )
