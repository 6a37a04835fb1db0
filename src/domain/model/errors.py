"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Callers (the session store, the CLI) catch them and surface the message.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthError(DomainError):
    """Credential, registration or profile failure with a human-readable message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Email/password pair does not match any account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class EmailAlreadyExistsError(AuthError, DuplicateError):
    """Registration attempted with an email that is already taken."""

    def __init__(self, message: str = "User with this email already exists"):
        super().__init__(message)


class UserNotFoundError(AuthError, NotFoundError):
    """Profile update addressed a user id unknown to the directory."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class NoActiveSessionError(DomainError):
    """Profile update attempted while no user is logged in."""

    def __init__(self, message: str = "No user logged in"):
        super().__init__(message)
