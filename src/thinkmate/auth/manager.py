"""Mock authentication state manager.

Hidden design decisions:
- No credential verification: any email containing "@" logs in
- A fixed simulated delay stands in for the server round-trip
- Sign-up auto-verifies immediately
- The user record is persisted through the key-value store
"""

import asyncio
import logging

from pydantic import ValidationError

from ..config import LOGIN_DELAY, USER_KEY
from ..errors import StorageError
from ..storage import KeyValueStore
from .models import User

logger = logging.getLogger(__name__)


def is_email_like(email: str) -> bool:
    """Loose email check used by login."""
    return "@" in email


class AuthManager:
    """Holds the nullable current user.

    Authenticated means a user is present and verified.
    """

    def __init__(
        self,
        store: KeyValueStore,
        delay: float = LOGIN_DELAY,
        key: str = USER_KEY,
    ):
        self._store = store
        self._delay = delay
        self._key = key
        self._user = self._load()

    def _load(self) -> User | None:
        data = self._store.get_json(self._key)
        if data is None:
            return None
        try:
            return User.model_validate(data)
        except ValidationError:
            logger.warning("Stored user record is invalid, ignoring")
            return None

    def _persist(self) -> None:
        try:
            if self._user is None:
                self._store.remove(self._key)
            else:
                self._store.set_json(self._key, self._user.model_dump())
        except StorageError as e:
            logger.error("Could not save user record: %s", e)

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._user.is_verified

    async def login(self, email: str, password: str) -> bool:
        """Log in with any email-like address.

        Args:
            email: Email address; must contain "@"
            password: Ignored

        Returns:
            True on success, False for a malformed email
        """
        await asyncio.sleep(self._delay)
        email = email.strip()
        if not is_email_like(email):
            logger.info("Rejected login for malformed email")
            return False
        self._user = User(email=email, name=email.split("@")[0], is_verified=True)
        self._persist()
        return True

    async def signup(self, email: str, name: str, password: str) -> bool:
        """Create a user and verify it immediately.

        Always succeeds.
        """
        await asyncio.sleep(self._delay)
        self._user = User(email=email.strip(), name=name.strip(), is_verified=False)
        self.verify_email()
        return True

    def verify_email(self) -> None:
        """Mark the current user as verified. No-op without a user."""
        if self._user is None:
            return
        self._user = self._user.model_copy(update={"is_verified": True})
        self._persist()

    def logout(self) -> None:
        self._user = None
        self._persist()
