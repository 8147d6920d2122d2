"""
FastAPI dependency injection for database sessions, repositories and the current user.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import user_id_from_authorization
from core.exceptions import AuthenticationError, DatabaseUnavailableError
from database import get_session, is_database_available
from database.models import User
from database.repositories import ThemeRepository, UserRepository
from services.favorite_service import FavoriteService

logger = logging.getLogger(__name__)


async def get_db_session() -> AsyncGenerator[AsyncSession | None, None]:
    """
    Get database session dependency.

    Returns None if database is not configured/available.
    """
    if not is_database_available():
        yield None
        return

    async for session in get_session():
        yield session


async def require_db_session(
    session: AsyncSession | None = Depends(get_db_session),
) -> AsyncSession:
    """Get a database session, raising 503 when the database is unavailable."""
    if session is None:
        raise DatabaseUnavailableError()
    return session


async def get_user_repository(
    session: AsyncSession = Depends(require_db_session),
) -> UserRepository:
    """Get UserRepository dependency."""
    return UserRepository(session)


async def get_theme_repository(
    session: AsyncSession = Depends(require_db_session),
) -> ThemeRepository:
    """Get ThemeRepository dependency."""
    return ThemeRepository(session)


async def get_favorite_service(
    session: AsyncSession = Depends(require_db_session),
) -> FavoriteService:
    """Get FavoriteService dependency."""
    return FavoriteService(session)


async def require_current_user(
    authorization: str | None = Header(None),
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Require an authenticated user.

    Resolves the bearer token to a stored user. Raises 401 if the token is
    missing or invalid, or if the user no longer exists.
    """
    user_id = user_id_from_authorization(authorization)

    user = await user_repo.get_by_id(user_id)
    if not user:
        logger.warning(f"Token refers to unknown user {user_id}")
        raise AuthenticationError(message="Invalid or expired token")
    return user
