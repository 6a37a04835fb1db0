"""JWT access tokens for the user directory."""

import os
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.user import User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))


def _secret_key() -> str:
    key = os.getenv("JWT_SECRET_KEY")
    if not key:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return key


def create_access_token(user: User) -> str:
    """Create a signed access token carrying the user's public identity."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "name": user.name,
        "email": user.email,
        "picture": user.profile_picture,
        "iat": now,
        "exp": now + timedelta(days=JWT_EXPIRATION_DAYS),
    }
    return jwt.encode(payload, _secret_key(), algorithm=JWT_ALGORITHM)


def identity_from_token(token: str) -> User | None:
    """Read the user identity from a token WITHOUT verifying it.

    Used to rehydrate a session at startup; the token is trusted as-is.
    Returns None when the token is not a readable JWT.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.debug(f"Unreadable token: {e}")
        return None

    user_id = claims.get("sub")
    if not user_id:
        return None
    return User(
        id=user_id,
        name=claims.get("name", ""),
        email=claims.get("email", ""),
        profile_picture=claims.get("picture"),
    )
