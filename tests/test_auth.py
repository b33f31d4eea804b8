"""Unit tests for the mock authentication module."""
import pytest
from conftest import ReadOnlyStore

from thinkmate.auth import AuthManager, User, is_email_like
from thinkmate.config import USER_KEY
from thinkmate.storage import InMemoryStore


@pytest.fixture
def auth(store):
    return AuthManager(store, delay=0)


class TestEmailCheck:
    def test_email_like(self):
        assert is_email_like("student@school.edu")
        assert not is_email_like("student.school.edu")


class TestAuthManager:
    """Tests for login, signup and logout."""

    def test_starts_signed_out(self, auth):
        assert auth.user is None
        assert not auth.is_authenticated

    @pytest.mark.asyncio
    async def test_login_derives_name_from_email(self, auth, store):
        """Test login creates a verified user named after the local part."""
        assert await auth.login("maria@school.edu", "secret")

        assert auth.user == User(email="maria@school.edu", name="maria", is_verified=True)
        assert auth.is_authenticated
        assert store.get_json(USER_KEY)["email"] == "maria@school.edu"

    @pytest.mark.asyncio
    async def test_login_rejects_malformed_email(self, auth, store):
        assert not await auth.login("not-an-email", "secret")
        assert auth.user is None
        assert store.get(USER_KEY) is None

    @pytest.mark.asyncio
    async def test_signup_is_immediately_authenticated(self, auth):
        """Test signup verifies the new account straight away."""
        assert await auth.signup("a@b.com", "A", "pw")

        assert auth.user.name == "A"
        assert auth.user.is_verified
        assert auth.is_authenticated

    @pytest.mark.asyncio
    async def test_logout_clears_user_and_storage(self, auth, store):
        await auth.login("a@b.com", "pw")
        auth.logout()

        assert auth.user is None
        assert not auth.is_authenticated
        assert USER_KEY not in store.keys()

    @pytest.mark.asyncio
    async def test_user_restored_from_store(self, auth, store):
        await auth.login("a@b.com", "pw")
        assert AuthManager(store, delay=0).user == auth.user

    def test_unverified_user_is_not_authenticated(self):
        store = InMemoryStore()
        store.set_json(USER_KEY, {"email": "a@b.com", "name": "A", "is_verified": False})
        manager = AuthManager(store, delay=0)

        assert manager.user is not None
        assert not manager.is_authenticated

    def test_verify_email_without_user_is_noop(self, auth):
        auth.verify_email()
        assert auth.user is None

    def test_invalid_stored_user_is_ignored(self):
        store = InMemoryStore({USER_KEY: '{"name": "missing email"}'})
        assert AuthManager(store, delay=0).user is None

    @pytest.mark.asyncio
    async def test_write_failure_keeps_session_in_memory(self):
        """Test login and logout still work when the user record cannot be saved."""
        auth = AuthManager(ReadOnlyStore(), delay=0)

        assert await auth.login("maria@school.edu", "secret")
        assert auth.is_authenticated

        auth.logout()
        assert auth.user is None
