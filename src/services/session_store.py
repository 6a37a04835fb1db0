"""Session store: authentication state machine over TokenStore and AuthService.

State changes go through ``reduce``: one pure handler per action type, each
returning a new immutable Session. ``SessionStore.dispatch`` applies actions
one at a time from a mailbox, so listeners never see a half-applied update.
"""

import logging
from collections import deque
from dataclasses import asdict, replace
from typing import Callable

from domain.model.errors import DomainError, NoActiveSessionError
from domain.model.session import (
    INITIAL_SESSION,
    AuthFailed,
    AuthLoaded,
    AuthRequested,
    ErrorCleared,
    LoggedOut,
    LoginSuccess,
    RegisterSuccess,
    Session,
    SessionAction,
    UserUpdated,
)
from domain.model.user import User
from port.auth_service import AuthService
from port.token_store import TokenStore
from services.token_service import identity_from_token

logger = logging.getLogger(__name__)

Listener = Callable[[Session], None]


# ── Reducer ──────────────────────────────────────────────


def _on_auth_requested(state: Session, action: AuthRequested) -> Session:
    return replace(state, loading=True)


def _on_authenticated(state: Session, action: LoginSuccess | RegisterSuccess) -> Session:
    return replace(
        state,
        user=action.user,
        is_authenticated=True,
        loading=False,
        error=None,
        bootstrapped=True,
    )


def _on_logged_out(state: Session, action: LoggedOut) -> Session:
    return replace(state, user=None, is_authenticated=False, loading=False, bootstrapped=True)


def _on_auth_failed(state: Session, action: AuthFailed) -> Session:
    return replace(state, error=action.message, loading=False)


def _on_error_cleared(state: Session, action: ErrorCleared) -> Session:
    return replace(state, error=None)


def _on_user_updated(state: Session, action: UserUpdated) -> Session:
    return replace(state, user=action.user)


def _on_auth_loaded(state: Session, action: AuthLoaded) -> Session:
    return replace(state, loading=False, bootstrapped=True)


_HANDLERS = {
    AuthRequested: _on_auth_requested,
    LoginSuccess: _on_authenticated,
    RegisterSuccess: _on_authenticated,
    LoggedOut: _on_logged_out,
    AuthFailed: _on_auth_failed,
    ErrorCleared: _on_error_cleared,
    UserUpdated: _on_user_updated,
    AuthLoaded: _on_auth_loaded,
}


def reduce(state: Session, action: SessionAction) -> Session:
    """Apply *action* to *state* and return the next state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)


def _failure_message(error: Exception, fallback: str) -> str:
    if isinstance(error, DomainError) and str(error):
        return str(error)
    return fallback


# ── Store ────────────────────────────────────────────────


class SessionStore:
    """Owns the current Session and performs the auth transitions.

    Construct one per process, ``await init()`` to restore the stored token,
    and ``dispose()`` when shutting down. Calls that resolve after dispose
    are dropped without touching state or raising.
    """

    def __init__(
        self,
        token_store: TokenStore,
        auth: AuthService,
        rehydrate: Callable[[str], User | None] = identity_from_token,
    ):
        self._token_store = token_store
        self._auth = auth
        self._rehydrate = rehydrate
        self._state = INITIAL_SESSION
        self._mailbox: deque[SessionAction] = deque()
        self._draining = False
        self._listeners: list[Listener] = []
        self._disposed = False

    @property
    def state(self) -> Session:
        return self._state

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: SessionAction) -> Session:
        """Queue *action* and apply pending actions in arrival order.

        Actions dispatched from inside a listener are applied after the
        current one finishes.
        """
        if self._disposed:
            logger.debug("Dropping action after dispose", extra={"action": type(action).__name__})
            return self._state

        self._mailbox.append(action)
        if self._draining:
            return self._state

        self._draining = True
        try:
            while self._mailbox:
                self._state = reduce(self._state, self._mailbox.popleft())
                for listener in list(self._listeners):
                    listener(self._state)
        finally:
            self._draining = False
        return self._state

    # ── lifecycle ────────────────────────────────────────────

    async def init(self) -> Session:
        """Restore the session from the stored token.

        The token is not re-validated with the auth service; its presence
        alone grants the Authenticated state.
        """
        token = await self._token_store.get_token()
        if self._disposed:
            return self._state
        if not token:
            return self.dispatch(AuthLoaded())

        user = self._rehydrate(token)
        if user is None:
            logger.warning("Stored token carries no readable identity, discarding it")
            await self._token_store.remove_token()
            return self.dispatch(AuthLoaded())

        logger.info("Session restored from stored token", extra={"userId": user.id})
        return self.dispatch(LoginSuccess(user))

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()
        self._mailbox.clear()

    # ── transitions ──────────────────────────────────────────

    async def login(self, email: str, password: str) -> User | None:
        """Log in and persist the token.

        Raises the auth failure after recording its message in ``error``.
        """
        return await self._authenticate(LoginSuccess, "Login failed", self._auth.login, email, password)

    async def register(self, name: str, email: str, password: str) -> User | None:
        """Register, log in as the new user and persist the token."""
        return await self._authenticate(
            RegisterSuccess, "Registration failed", self._auth.register, name, email, password
        )

    async def _authenticate(self, success, fallback: str, call, *args) -> User | None:
        self.dispatch(AuthRequested())
        try:
            user, token = await call(*args)
            if self._disposed:
                logger.debug("Discarding auth result after dispose")
                return None
            await self._token_store.set_token(token)
        except Exception as e:
            if self._disposed:
                logger.debug("Discarding auth failure after dispose")
                return None
            self.dispatch(AuthFailed(_failure_message(e, fallback)))
            raise

        self.dispatch(success(user))
        return user

    async def logout(self) -> None:
        """Forget the token and the user. Always ends Unauthenticated."""
        try:
            await self._token_store.remove_token()
        finally:
            self.dispatch(LoggedOut())
        logger.info("Logged out")

    async def update_profile(self, changes: dict) -> User | None:
        """Update the current user's profile and merge the result into the session.

        Raises:
            NoActiveSessionError: no user is logged in (state is untouched)
        """
        user = self._state.user
        if user is None:
            raise NoActiveSessionError()

        try:
            updated = await self._auth.update_profile(user.id, changes)
        except Exception as e:
            if self._disposed:
                return None
            self.dispatch(AuthFailed(_failure_message(e, "Profile update failed")))
            raise

        current = self._state.user
        if self._disposed or current is None or current.id != user.id:
            logger.debug("Discarding profile update for a session that has ended")
            return None

        merged = current.merged(asdict(updated))
        self.dispatch(UserUpdated(merged))
        return merged

    def clear_error(self) -> None:
        self.dispatch(ErrorCleared())
