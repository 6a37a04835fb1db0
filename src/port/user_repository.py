from typing import Protocol

from domain.model.user import UserAccount


class UserRepository(Protocol):
    """Protocol defining the interface for user directory access."""
    def create(self, email: str, password_hash: str, name: str) -> UserAccount | None:
        """Create a new account. Return UserAccount or None if creation failed."""
        ...

    def get_by_email(self, email: str) -> UserAccount | None:
        """Find an account by email. Return UserAccount or None if not found."""
        ...

    def update_profile(self, user_id: str, changes: dict) -> UserAccount | None:
        """Overwrite profile fields. Return the updated account or None if not found.

        Raises EmailAlreadyExistsError when the new email is taken and
        DomainError when the write fails.
        """
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...
