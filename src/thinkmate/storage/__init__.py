"""Key-value persistence port for user, theme and history records."""

from .base import KeyValueStore
from .factory import create_store
from .in_memory import InMemoryStore
from .json_file import JsonFileStore

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "create_store",
]
