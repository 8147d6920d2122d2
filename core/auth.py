"""
Authentication and access policy helpers.

Token handling lives in core.security; this module turns a bearer token into
a user id and decides whose data a caller may read.
"""

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from .exceptions import AuthenticationError, AuthorizationError, UserNotFoundError
from .security import extract_token_from_header, verify_token

if TYPE_CHECKING:
    from database.models import User

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def user_id_from_authorization(authorization: str | None) -> UUID:
    """
    Resolve the user id carried by an Authorization header.

    Raises:
        AuthenticationError: If the header is missing, malformed, or the token
            does not carry a valid user id in its ``sub`` claim.
    """
    token = extract_token_from_header(authorization)
    if not token:
        raise AuthenticationError()

    payload = verify_token(token)
    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError(message="Token has no subject")

    try:
        return UUID(str(subject))
    except ValueError:
        logger.warning("Token subject is not a valid user id: %s", subject)
        raise AuthenticationError(message="Invalid or expired token")


def is_admin_user(user: "User") -> bool:
    """Check if the user has admin privileges."""
    return getattr(user, "role", None) == ADMIN_ROLE


def _normalize_user_id(value: str) -> str:
    try:
        return str(UUID(value))
    except ValueError:
        return value


def resolve_target_user_id(user: "User", query_user_id: str | None) -> UUID:
    """
    Decide whose data a request reads.

    An empty query, or one naming the caller, targets the caller. Any other
    user id is only allowed for admins.

    Raises:
        AuthorizationError: A non-admin asked for someone else's data.
        UserNotFoundError: An admin asked for an id that is not a UUID.
    """
    if not query_user_id or _normalize_user_id(query_user_id) == str(user.id):
        return user.id

    if not is_admin_user(user):
        raise AuthorizationError()

    try:
        return UUID(query_user_id)
    except ValueError:
        raise UserNotFoundError()
