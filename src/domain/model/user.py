from dataclasses import dataclass, fields, replace
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Domain model representing the public identity of a user."""

    EDITABLE_FIELDS = ('name', 'email', 'profile_picture')

    id: str
    name: str
    email: str
    profile_picture: str | None = None

    def merged(self, changes: dict) -> 'User':
        """Return a copy with known fields overwritten by *changes*.

        Unknown keys are ignored; ``id`` is never replaced.
        """
        known = {f.name for f in fields(self)} - {'id'}
        return replace(self, **{k: v for k, v in changes.items() if k in known})


@dataclass
class UserAccount:
    """User directory record: the public identity plus credentials."""
    user: User
    password_hash: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email
