"""
Theme repository.

Provides data access for Theme, including the favorites counter.
"""

from uuid import UUID

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Theme


class ThemeRepository:
    """Repository for Theme model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, theme_id: UUID) -> Theme | None:
        """Get a theme by ID."""
        result = await self.session.execute(select(Theme).where(Theme.id == theme_id))
        return result.scalar_one_or_none()

    async def create(
        self,
        user_id: UUID,
        name: str,
        description: str | None = None,
        versions_count: int = 0,
    ) -> Theme:
        """Create a new theme owned by user_id."""
        theme = Theme(
            user_id=user_id,
            name=name,
            description=description,
            versions_count=versions_count,
        )
        self.session.add(theme)
        await self.session.flush()
        return theme

    async def list_by_user(self, user_id: UUID) -> list[Theme]:
        """List themes owned by a user, newest first."""
        result = await self.session.execute(
            select(Theme).where(Theme.user_id == user_id).order_by(desc(Theme.created_at))
        )
        return list(result.scalars().all())

    async def adjust_favorites_count(self, theme_id: UUID, delta: int) -> None:
        """Add delta to favorites_count in SQL so concurrent writers don't clobber it."""
        await self.session.execute(
            update(Theme)
            .where(Theme.id == theme_id)
            .values(favorites_count=Theme.favorites_count + delta)
        )
