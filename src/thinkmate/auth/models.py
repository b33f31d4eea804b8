"""Data models for the local mock user."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Locally synthesized user profile.

    Not a real identity record: nothing checks uniqueness or credentials.
    """

    model_config = ConfigDict(frozen=True)

    email: str = Field(description="Email address as entered")
    name: str = Field(description="Display name")
    is_verified: bool = Field(default=False, description="Email verification flag")
