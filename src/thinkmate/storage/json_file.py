"""JSON file key-value store.

Persists the whole key space as one JSON object on disk. Every write
rewrites the file through a temporary file and an atomic rename.
"""

import json
import logging
import os
from pathlib import Path

from ..errors import StorageError
from .base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Key-value store backed by a single JSON file.

    The file holds an object mapping keys to string values. A missing file
    is an empty store; an unreadable file is treated as empty and is
    overwritten on the next write.
    """

    def __init__(self, path: str | Path = "./thinkmate_store.json"):
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read store file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object, ignoring", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(
                json.dumps(self._data, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Could not write store file {self._path}: {e}") from e

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def keys(self) -> list[str]:
        return list(self._data)

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
