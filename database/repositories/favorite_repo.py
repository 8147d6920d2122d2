"""
Favorite repository for theme and plugin favorites.

Only touches the join tables. Keeping the parents' favorites_count in step
is the caller's job (see services.favorite_service).
"""

from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import FavoritePlugin, FavoriteTheme


class FavoriteRepository:
    """Repository for FavoriteTheme and FavoritePlugin operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ============ Themes ============

    async def get_theme_favorite(self, user_id: UUID, theme_id: UUID) -> FavoriteTheme | None:
        """Check if user has favorited a theme."""
        result = await self.session.execute(
            select(FavoriteTheme).where(
                FavoriteTheme.user_id == user_id,
                FavoriteTheme.theme_id == theme_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_theme_favorite(self, user_id: UUID, theme_id: UUID) -> FavoriteTheme:
        favorite = FavoriteTheme(user_id=user_id, theme_id=theme_id)
        self.session.add(favorite)
        await self.session.flush()
        return favorite

    async def list_theme_favorites(self, user_id: UUID) -> list[FavoriteTheme]:
        """List a user's favorite themes with the theme loaded, newest first."""
        result = await self.session.execute(
            select(FavoriteTheme)
            .options(selectinload(FavoriteTheme.theme))
            .where(FavoriteTheme.user_id == user_id)
            .order_by(desc(FavoriteTheme.created_at))
        )
        return list(result.scalars().all())

    async def count_theme_favorites(self, theme_id: UUID) -> int:
        """Count favorite rows pointing at a theme."""
        result = await self.session.execute(
            select(func.count()).select_from(FavoriteTheme).where(FavoriteTheme.theme_id == theme_id)
        )
        return result.scalar_one()

    # ============ Plugins ============

    async def get_plugin_favorite(self, user_id: UUID, plugin_id: UUID) -> FavoritePlugin | None:
        """Check if user has favorited a plugin."""
        result = await self.session.execute(
            select(FavoritePlugin).where(
                FavoritePlugin.user_id == user_id,
                FavoritePlugin.plugin_id == plugin_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_plugin_favorite(self, user_id: UUID, plugin_id: UUID) -> FavoritePlugin:
        favorite = FavoritePlugin(user_id=user_id, plugin_id=plugin_id)
        self.session.add(favorite)
        await self.session.flush()
        return favorite

    async def list_plugin_favorites(self, user_id: UUID) -> list[FavoritePlugin]:
        """List a user's favorite plugins with the plugin loaded, newest first."""
        result = await self.session.execute(
            select(FavoritePlugin)
            .options(selectinload(FavoritePlugin.plugin))
            .where(FavoritePlugin.user_id == user_id)
            .order_by(desc(FavoritePlugin.created_at))
        )
        return list(result.scalars().all())

    async def count_plugin_favorites(self, plugin_id: UUID) -> int:
        """Count favorite rows pointing at a plugin."""
        result = await self.session.execute(
            select(func.count())
            .select_from(FavoritePlugin)
            .where(FavoritePlugin.plugin_id == plugin_id)
        )
        return result.scalar_one()

    # ============ Shared ============

    async def delete(self, favorite: FavoriteTheme | FavoritePlugin) -> None:
        """Delete a favorite row."""
        await self.session.delete(favorite)
        await self.session.flush()
