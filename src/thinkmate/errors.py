"""Exception hierarchy for ThinkMate."""


class ThinkMateError(Exception):
    """Base class for ThinkMate errors."""


class AIServiceError(ThinkMateError):
    """The external AI service failed or returned an unusable response."""

    def __init__(self, message: str, operation: str | None = None):
        msg = f"AI service error: {message}"
        if operation:
            msg += f" (operation: {operation})"
        super().__init__(msg)
        self.operation = operation


class QuotaExceededError(AIServiceError):
    """The AI service rejected the request with a quota/rate-limit error (429)."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(f"Quota exceeded: {message}", operation)


class StorageError(ThinkMateError):
    """A persistence backend could not read or write a value."""
