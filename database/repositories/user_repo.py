"""
User repository for user lookups.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User


class UserRepository:
    """Repository for User model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(
        self,
        username: str,
        email: str | None = None,
        display_name: str | None = None,
        avatar_url: str | None = None,
        role: str = "user",
    ) -> User:
        """Create a new user."""
        user = User(
            username=username,
            email=email,
            display_name=display_name,
            avatar_url=avatar_url,
            role=role,
        )
        self.session.add(user)
        await self.session.flush()
        return user
