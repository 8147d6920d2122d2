"""
Plugin repository.
"""

from uuid import UUID

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Plugin


class PluginRepository:
    """Repository for Plugin model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, plugin_id: UUID) -> Plugin | None:
        """Get a plugin by ID."""
        result = await self.session.execute(select(Plugin).where(Plugin.id == plugin_id))
        return result.scalar_one_or_none()

    async def create(
        self,
        user_id: UUID,
        name: str,
        description: str | None = None,
        versions_count: int = 0,
    ) -> Plugin:
        """Create a new plugin owned by user_id."""
        plugin = Plugin(
            user_id=user_id,
            name=name,
            description=description,
            versions_count=versions_count,
        )
        self.session.add(plugin)
        await self.session.flush()
        return plugin

    async def list_by_user(self, user_id: UUID) -> list[Plugin]:
        """List plugins owned by a user, newest first."""
        result = await self.session.execute(
            select(Plugin).where(Plugin.user_id == user_id).order_by(desc(Plugin.created_at))
        )
        return list(result.scalars().all())

    async def adjust_favorites_count(self, plugin_id: UUID, delta: int) -> None:
        await self.session.execute(
            update(Plugin)
            .where(Plugin.id == plugin_id)
            .values(favorites_count=Plugin.favorites_count + delta)
        )
