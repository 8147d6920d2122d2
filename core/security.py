"""
Bearer tokens identifying marketplace users.

A token is an HS256 JWT whose ``sub`` claim is the user's UUID.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from .config import get_settings
from .exceptions import AuthenticationError


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a token for a user.

    Args:
        user_id: Stored as the ``sub`` claim
        expires_delta: Lifetime, defaults to ``jwt_expire_days``
    """
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(days=settings.jwt_expire_days)

    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Decode a token and check its signature and expiry.

    Raises:
        AuthenticationError: If the token is invalid or expired
    """
    settings = get_settings()

    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(
            message="Invalid or expired token",
            details={"error": str(e)},
        )


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a ``Bearer <token>`` header, or None."""
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip() or " " in token.strip():
        return None

    return token.strip()
