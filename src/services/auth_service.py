"""Auth service: registration, login and profile updates over a UserRepository.

Implements the AuthService port. Blocking work (bcrypt, repository I/O) runs
in a worker thread.
"""

import asyncio
import logging
import re

import bcrypt

from domain.model.errors import (
    DomainError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from domain.model.user import User
from port.user_repository import UserRepository
from services.token_service import create_access_token

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
# bcrypt rejects longer secrets
MAX_PASSWORD_BYTES = 72

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _validate_email(email: str) -> None:
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")


def _validate_password(password: str) -> None:
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    if not re.search(r"[A-Z]", password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain at least one number")


def _validate_changes(changes: dict) -> None:
    unknown = set(changes) - set(User.EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
    if 'name' in changes and not str(changes['name']).strip():
        raise ValidationError("Name must not be empty")
    if 'email' in changes:
        _validate_email(changes['email'])


class LocalAuthService:
    """AuthService backed by a UserRepository, issuing JWT access tokens."""

    def __init__(self, repo: UserRepository, rounds: int = BCRYPT_ROUNDS):
        self.repo = repo
        self.rounds = rounds

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Register a new user.

        Raises:
            ValidationError: malformed email, empty name or weak password
            EmailAlreadyExistsError: email already registered
        """
        if not name.strip():
            raise ValidationError("Name must not be empty")
        _validate_email(email)
        _validate_password(password)

        if await asyncio.to_thread(self.repo.get_by_email, email):
            raise EmailAlreadyExistsError()

        password_hash = await asyncio.to_thread(_hash_password, password, self.rounds)
        account = await asyncio.to_thread(self.repo.create, email, password_hash, name)
        if not account:
            raise DomainError("Failed to create user")

        logger.info("User registered", extra={"userId": account.id})
        return account.user, create_access_token(account.user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate by email and password.

        Does not reveal whether the email exists.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidCredentialsError()

        account = await asyncio.to_thread(self.repo.get_by_email, email)
        if not account:
            raise InvalidCredentialsError()
        if not await asyncio.to_thread(_verify_password, password, account.password_hash):
            raise InvalidCredentialsError()

        # login succeeds even if the timestamp write fails
        await asyncio.to_thread(self.repo.update_last_login, account.id)
        logger.info("User logged in", extra={"userId": account.id})
        return account.user, create_access_token(account.user)

    async def update_profile(self, user_id: str, changes: dict) -> User:
        """Apply profile changes and return the updated user.

        Raises:
            ValidationError: unknown or malformed fields
            UserNotFoundError: no account with *user_id*
        """
        _validate_changes(changes)
        if 'email' in changes:
            existing = await asyncio.to_thread(self.repo.get_by_email, changes['email'])
            if existing and existing.id != user_id:
                raise EmailAlreadyExistsError()

        account = await asyncio.to_thread(self.repo.update_profile, user_id, changes)
        if not account:
            raise UserNotFoundError()

        logger.info("Profile updated", extra={"userId": user_id, "fields": sorted(changes)})
        return account.user
