"""Abstract base class for key-value stores.

This module hides the design decision of where small local records live
(user profile, theme preference, chat history). Values are opaque strings;
callers JSON-encode their records.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract string key-value store.

    The local analogue of browser storage: a flat namespace of string keys
    mapping to string values, with no schema or versioning.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing a missing key is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all stored keys."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    def get_json(self, key: str) -> Any | None:
        """Decode a JSON value, treating corrupt data as absent.

        Args:
            key: Storage key

        Returns:
            Decoded value, or None if missing or not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt value stored under %r", key)
            return None

    def set_json(self, key: str, value: Any) -> None:
        """Encode value as JSON and store it under key."""
        self.set(key, json.dumps(value, ensure_ascii=False))
