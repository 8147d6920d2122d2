"""
Favorite service for themes and plugins.

Each add/remove checks the parent entity and the join row, writes the join
row and moves the parent's favorites_count by one, then commits. Everything
happens on a single session transaction, and any failure rolls the whole
thing back, so favorites_count always equals the number of join rows.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import (
    AlreadyFavoritedError,
    AppException,
    FavoriteNotFoundError,
    FavoriteOperationError,
    PluginNotFoundError,
    ThemeNotFoundError,
)
from database.models import FavoritePlugin, FavoriteTheme
from database.repositories import FavoriteRepository, PluginRepository, ThemeRepository

logger = logging.getLogger(__name__)


def _parse_id(value: str | UUID) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class FavoriteService:
    """Adds, removes and lists a user's favorite themes and plugins."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.theme_repo = ThemeRepository(session)
        self.plugin_repo = PluginRepository(session)
        self.favorite_repo = FavoriteRepository(session)

    @asynccontextmanager
    async def _transaction(self, failure_message: str) -> AsyncIterator[None]:
        """
        Commit the work done inside the block, or roll all of it back.

        AppExceptions propagate unchanged. Anything else is logged and
        reported as FavoriteOperationError(failure_message).
        """
        try:
            yield
            await self.session.commit()
        except AppException:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.exception(f"{failure_message} {e}")
            raise FavoriteOperationError(message=failure_message) from e

    # ============ Themes ============

    async def list_theme_favorites(self, user_id: UUID) -> list[FavoriteTheme]:
        return await self.favorite_repo.list_theme_favorites(user_id)

    async def add_theme_favorite(self, user_id: UUID, theme_id: str | UUID) -> int:
        """
        Favorite a theme for a user.

        Returns:
            The theme's favorites_count after the change.

        Raises:
            ThemeNotFoundError: Unknown theme (404)
            AlreadyFavoritedError: The user already favorited it (400)
            FavoriteOperationError: Unexpected failure (500)
        """
        async with self._transaction("Failed to add favorite theme."):
            theme_uuid = _parse_id(theme_id)
            theme = await self.theme_repo.get_by_id(theme_uuid) if theme_uuid else None
            if not theme:
                raise ThemeNotFoundError()

            existing = await self.favorite_repo.get_theme_favorite(user_id, theme_uuid)
            if existing:
                raise AlreadyFavoritedError(message="Theme already favorited.")

            try:
                await self.favorite_repo.create_theme_favorite(user_id, theme_uuid)
            except IntegrityError:
                # Duplicate only if a concurrent add committed the same pair
                await self.session.rollback()
                if await self.favorite_repo.get_theme_favorite(user_id, theme_uuid):
                    raise AlreadyFavoritedError(message="Theme already favorited.")
                raise

            await self.theme_repo.adjust_favorites_count(theme_uuid, 1)

        await self.session.refresh(theme)
        logger.info(f"User {user_id} favorited theme {theme_uuid}")
        return theme.favorites_count

    async def remove_theme_favorite(self, user_id: UUID, theme_id: str | UUID) -> None:
        """
        Remove a theme from a user's favorites.

        Raises:
            FavoriteNotFoundError: The user never favorited it (404)
            FavoriteOperationError: Unexpected failure (500)
        """
        async with self._transaction("Failed to remove favorite theme."):
            theme_uuid = _parse_id(theme_id)
            existing = (
                await self.favorite_repo.get_theme_favorite(user_id, theme_uuid)
                if theme_uuid
                else None
            )
            if not existing:
                raise FavoriteNotFoundError(message="Favorite theme not found.")

            await self.favorite_repo.delete(existing)

            theme = await self.theme_repo.get_by_id(theme_uuid)
            if theme:
                await self.theme_repo.adjust_favorites_count(theme_uuid, -1)

        logger.info(f"User {user_id} unfavorited theme {theme_uuid}")

    # ============ Plugins ============

    async def list_plugin_favorites(self, user_id: UUID) -> list[FavoritePlugin]:
        return await self.favorite_repo.list_plugin_favorites(user_id)

    async def add_plugin_favorite(self, user_id: UUID, plugin_id: str | UUID) -> int:
        """
        Favorite a plugin for a user.

        Returns:
            The plugin's favorites_count after the change.

        Raises:
            PluginNotFoundError: Unknown plugin (404)
            AlreadyFavoritedError: The user already favorited it (400)
            FavoriteOperationError: Unexpected failure (500)
        """
        async with self._transaction("Failed to add favorite plugin."):
            plugin_uuid = _parse_id(plugin_id)
            plugin = await self.plugin_repo.get_by_id(plugin_uuid) if plugin_uuid else None
            if not plugin:
                raise PluginNotFoundError()

            existing = await self.favorite_repo.get_plugin_favorite(user_id, plugin_uuid)
            if existing:
                raise AlreadyFavoritedError(message="Plugin already favorited.")

            try:
                await self.favorite_repo.create_plugin_favorite(user_id, plugin_uuid)
            except IntegrityError:
                await self.session.rollback()
                if await self.favorite_repo.get_plugin_favorite(user_id, plugin_uuid):
                    raise AlreadyFavoritedError(message="Plugin already favorited.")
                raise

            await self.plugin_repo.adjust_favorites_count(plugin_uuid, 1)

        await self.session.refresh(plugin)
        logger.info(f"User {user_id} favorited plugin {plugin_uuid}")
        return plugin.favorites_count

    async def remove_plugin_favorite(self, user_id: UUID, plugin_id: str | UUID) -> None:
        """Remove a plugin from a user's favorites."""
        async with self._transaction("Failed to remove favorite plugin."):
            plugin_uuid = _parse_id(plugin_id)
            existing = (
                await self.favorite_repo.get_plugin_favorite(user_id, plugin_uuid)
                if plugin_uuid
                else None
            )
            if not existing:
                raise FavoriteNotFoundError(message="Favorite plugin not found.")

            await self.favorite_repo.delete(existing)

            plugin = await self.plugin_repo.get_by_id(plugin_uuid)
            if plugin:
                await self.plugin_repo.adjust_favorites_count(plugin_uuid, -1)

        logger.info(f"User {user_id} unfavorited plugin {plugin_uuid}")
