"""Session state and the actions that move it.

Actions form a tagged union; ``services.session_store.reduce`` has one
handler per action type.
"""

from dataclasses import dataclass
from enum import Enum

from domain.model.user import User


class SessionPhase(str, Enum):
    """Coarse authentication state. ``error`` is an overlay, not a phase."""
    BOOTSTRAPPING = 'bootstrapping'
    UNAUTHENTICATED = 'unauthenticated'
    AUTHENTICATED = 'authenticated'


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of the authentication state."""
    user: User | None = None
    is_authenticated: bool = False
    loading: bool = True
    error: str | None = None
    bootstrapped: bool = False

    def __post_init__(self):
        if self.is_authenticated and self.user is None:
            raise ValueError("Authenticated session requires a user")

    @property
    def phase(self) -> SessionPhase:
        if self.is_authenticated:
            return SessionPhase.AUTHENTICATED
        if not self.bootstrapped:
            return SessionPhase.BOOTSTRAPPING
        return SessionPhase.UNAUTHENTICATED


INITIAL_SESSION = Session()


# ── Actions ──────────────────────────────────────────────


@dataclass(frozen=True)
class AuthRequested:
    """A login or register call is in flight."""


@dataclass(frozen=True)
class LoginSuccess:
    user: User


@dataclass(frozen=True)
class RegisterSuccess:
    user: User


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class AuthFailed:
    message: str


@dataclass(frozen=True)
class ErrorCleared:
    pass


@dataclass(frozen=True)
class UserUpdated:
    user: User


@dataclass(frozen=True)
class AuthLoaded:
    """Bootstrap finished without a stored token."""


SessionAction = (
    AuthRequested
    | LoginSuccess
    | RegisterSuccess
    | LoggedOut
    | AuthFailed
    | ErrorCleared
    | UserUpdated
    | AuthLoaded
)
