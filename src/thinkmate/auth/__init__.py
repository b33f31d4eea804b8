"""Local mock authentication."""

from .manager import AuthManager, is_email_like
from .models import User

__all__ = ["AuthManager", "User", "is_email_like"]
