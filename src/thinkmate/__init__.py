"""
ThinkMate: a study-buddy assistant built on Google Gemini.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .errors import AIServiceError, QuotaExceededError, StorageError, ThinkMateError
from .storage import KeyValueStore, create_store

__all__ = [
    "AIServiceError",
    "KeyValueStore",
    "QuotaExceededError",
    "StorageError",
    "ThinkMateError",
    "create_store",
]
