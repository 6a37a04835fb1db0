"""Port for the user directory's authentication operations."""

from typing import Protocol

from domain.model.user import User


class AuthService(Protocol):
    """Login, registration and profile updates against a user directory.

    Failures are raised as ``domain.model.errors.AuthError`` subclasses.
    """

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Return (user, token). Raises InvalidCredentialsError."""
        ...

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and return (user, token). Raises EmailAlreadyExistsError."""
        ...

    async def update_profile(self, user_id: str, changes: dict) -> User:
        """Apply *changes* to the user and return it. Raises UserNotFoundError."""
        ...
