"""In-memory key-value store.

Dict-based storage. Data is lost when the process exits.
"""

from .base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """In-memory key-value store (process lifetime only).

    Suitable for tests and throwaway sessions.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    @property
    def backend_type(self) -> str:
        return "memory"
