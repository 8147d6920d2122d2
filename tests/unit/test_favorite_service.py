"""
Unit tests for FavoriteService against a SQLite database.

The key property: after any add/remove, favorites_count on the theme or
plugin equals the number of favorite rows that point at it.
"""

from uuid import uuid4

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AlreadyFavoritedError,
    FavoriteNotFoundError,
    FavoriteOperationError,
    PluginNotFoundError,
    ThemeNotFoundError,
)
from database.models import Plugin, Theme
from database.repositories import FavoriteRepository, PluginRepository, ThemeRepository
from services.favorite_service import FavoriteService


async def _theme_state(session_factory, theme_id) -> tuple[int, int]:
    """Return (favorites_count, join-row count) read through a fresh session."""
    async with session_factory() as db_session:
        theme = await ThemeRepository(db_session).get_by_id(theme_id)
        rows = await FavoriteRepository(db_session).count_theme_favorites(theme_id)
        return theme.favorites_count, rows


async def _plugin_state(session_factory, plugin_id) -> tuple[int, int]:
    async with session_factory() as db_session:
        plugin = await PluginRepository(db_session).get_by_id(plugin_id)
        rows = await FavoriteRepository(db_session).count_plugin_favorites(plugin_id)
        return plugin.favorites_count, rows


class TestThemeFavorites:
    """Tests for theme add/remove/list."""

    @pytest.mark.asyncio
    async def test_add_increments_counter(self, session, session_factory, marketplace):
        service = FavoriteService(session)

        count = await service.add_theme_favorite(marketplace.alice_id, str(marketplace.theme_id))

        assert count == 1
        assert await _theme_state(session_factory, marketplace.theme_id) == (1, 1)

    @pytest.mark.asyncio
    async def test_two_users_count_twice(self, session, session_factory, marketplace):
        service = FavoriteService(session)

        await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)
        count = await service.add_theme_favorite(marketplace.admin_id, marketplace.theme_id)

        assert count == 2
        assert await _theme_state(session_factory, marketplace.theme_id) == (2, 2)

    @pytest.mark.asyncio
    async def test_duplicate_add_is_rejected(self, session, session_factory, marketplace):
        service = FavoriteService(session)
        await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        with pytest.raises(AlreadyFavoritedError) as exc_info:
            await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Theme already favorited."
        assert await _theme_state(session_factory, marketplace.theme_id) == (1, 1)

    @pytest.mark.asyncio
    async def test_add_unknown_theme(self, session, marketplace):
        service = FavoriteService(session)

        with pytest.raises(ThemeNotFoundError):
            await service.add_theme_favorite(marketplace.alice_id, uuid4())

    @pytest.mark.asyncio
    async def test_add_with_malformed_id(self, session, marketplace):
        service = FavoriteService(session)

        with pytest.raises(ThemeNotFoundError):
            await service.add_theme_favorite(marketplace.alice_id, "not-a-uuid")

    @pytest.mark.asyncio
    async def test_remove_decrements_counter(self, session, session_factory, marketplace):
        service = FavoriteService(session)
        await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        await service.remove_theme_favorite(marketplace.alice_id, str(marketplace.theme_id))

        assert await _theme_state(session_factory, marketplace.theme_id) == (0, 0)

    @pytest.mark.asyncio
    async def test_remove_missing_favorite(self, session, session_factory, marketplace):
        service = FavoriteService(session)

        with pytest.raises(FavoriteNotFoundError) as exc_info:
            await service.remove_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert exc_info.value.message == "Favorite theme not found."
        assert await _theme_state(session_factory, marketplace.theme_id) == (0, 0)

    @pytest.mark.asyncio
    async def test_remove_only_affects_own_favorite(self, session, session_factory, marketplace):
        service = FavoriteService(session)
        await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)
        await service.add_theme_favorite(marketplace.admin_id, marketplace.theme_id)

        await service.remove_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert await _theme_state(session_factory, marketplace.theme_id) == (1, 1)
        remaining = await service.list_theme_favorites(marketplace.admin_id)
        assert [f.theme_id for f in remaining] == [marketplace.theme_id]
        assert await service.list_theme_favorites(marketplace.alice_id) == []

    @pytest.mark.asyncio
    async def test_list_includes_theme(self, session, marketplace):
        service = FavoriteService(session)
        await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        favorites = await service.list_theme_favorites(marketplace.alice_id)

        assert len(favorites) == 1
        assert favorites[0].theme.name == "Midnight"
        assert favorites[0].theme.favorites_count == 1


class TestPluginFavorites:
    """Tests for plugin add/remove/list."""

    @pytest.mark.asyncio
    async def test_add_and_remove(self, session, session_factory, marketplace):
        service = FavoriteService(session)

        count = await service.add_plugin_favorite(marketplace.alice_id, str(marketplace.plugin_id))
        assert count == 1
        assert await _plugin_state(session_factory, marketplace.plugin_id) == (1, 1)

        await service.remove_plugin_favorite(marketplace.alice_id, marketplace.plugin_id)
        assert await _plugin_state(session_factory, marketplace.plugin_id) == (0, 0)

    @pytest.mark.asyncio
    async def test_duplicate_add_is_rejected(self, session, session_factory, marketplace):
        service = FavoriteService(session)
        await service.add_plugin_favorite(marketplace.alice_id, marketplace.plugin_id)

        with pytest.raises(AlreadyFavoritedError) as exc_info:
            await service.add_plugin_favorite(marketplace.alice_id, marketplace.plugin_id)

        assert exc_info.value.message == "Plugin already favorited."
        assert await _plugin_state(session_factory, marketplace.plugin_id) == (1, 1)

    @pytest.mark.asyncio
    async def test_add_unknown_plugin(self, session, marketplace):
        service = FavoriteService(session)

        with pytest.raises(PluginNotFoundError):
            await service.add_plugin_favorite(marketplace.alice_id, uuid4())

    @pytest.mark.asyncio
    async def test_remove_missing_favorite(self, session, marketplace):
        service = FavoriteService(session)

        with pytest.raises(FavoriteNotFoundError) as exc_info:
            await service.remove_plugin_favorite(marketplace.alice_id, "not-a-uuid")

        assert exc_info.value.message == "Favorite plugin not found."

    @pytest.mark.asyncio
    async def test_list_includes_plugin(self, session, marketplace):
        service = FavoriteService(session)
        await service.add_plugin_favorite(marketplace.admin_id, marketplace.plugin_id)

        favorites = await service.list_plugin_favorites(marketplace.admin_id)

        assert [f.plugin.name for f in favorites] == ["Typing Indicator"]


class TestTransactionalBehavior:
    """Failures must leave the join table and the counter untouched."""

    @pytest.mark.asyncio
    async def test_counter_failure_rolls_back_insert(
        self, session, session_factory, marketplace, monkeypatch
    ):
        service = FavoriteService(session)

        async def broken_adjust(theme_id, delta):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(service.theme_repo, "adjust_favorites_count", broken_adjust)

        with pytest.raises(FavoriteOperationError) as exc_info:
            await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to add favorite theme."
        assert await _theme_state(session_factory, marketplace.theme_id) == (0, 0)

    @pytest.mark.asyncio
    async def test_counter_failure_rolls_back_delete(
        self, session, session_factory, marketplace, monkeypatch
    ):
        service = FavoriteService(session)
        await service.add_plugin_favorite(marketplace.alice_id, marketplace.plugin_id)

        async def broken_adjust(plugin_id, delta):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(service.plugin_repo, "adjust_favorites_count", broken_adjust)

        with pytest.raises(FavoriteOperationError) as exc_info:
            await service.remove_plugin_favorite(marketplace.alice_id, marketplace.plugin_id)

        assert exc_info.value.message == "Failed to remove favorite plugin."
        assert await _plugin_state(session_factory, marketplace.plugin_id) == (1, 1)

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_is_reported_as_already_favorited(
        self, session, session_factory, marketplace, monkeypatch
    ):
        # Another request inserts the row between our existence check and insert
        async with session_factory() as other_session:
            await FavoriteService(other_session).add_theme_favorite(
                marketplace.alice_id, marketplace.theme_id
            )

        service = FavoriteService(session)
        real_lookup = service.favorite_repo.get_theme_favorite
        lookups = []

        async def stale_first_lookup(user_id, theme_id):
            lookups.append(theme_id)
            if len(lookups) == 1:
                return None
            return await real_lookup(user_id, theme_id)

        monkeypatch.setattr(service.favorite_repo, "get_theme_favorite", stale_first_lookup)

        with pytest.raises(AlreadyFavoritedError):
            await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert await _theme_state(session_factory, marketplace.theme_id) == (1, 1)

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_not_a_duplicate(
        self, session, session_factory, marketplace, monkeypatch
    ):
        service = FavoriteService(session)

        async def fk_violation(user_id, theme_id):
            raise IntegrityError(
                "INSERT INTO favorite_themes", {}, Exception("FOREIGN KEY constraint failed")
            )

        monkeypatch.setattr(service.favorite_repo, "create_theme_favorite", fk_violation)

        with pytest.raises(FavoriteOperationError) as exc_info:
            await service.add_theme_favorite(marketplace.alice_id, marketplace.theme_id)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to add favorite theme."
        assert await _theme_state(session_factory, marketplace.theme_id) == (0, 0)


class TestParentDeleted:
    """Removing a favorite whose theme or plugin row no longer exists."""

    @pytest.mark.asyncio
    async def test_remove_theme_favorite_after_theme_deleted(self, session_factory, marketplace):
        async with session_factory() as db_session:
            await FavoriteService(db_session).add_theme_favorite(
                marketplace.alice_id, marketplace.theme_id
            )

        async with session_factory() as db_session:
            await db_session.execute(delete(Theme).where(Theme.id == marketplace.theme_id))
            await db_session.commit()

        async with session_factory() as db_session:
            await FavoriteService(db_session).remove_theme_favorite(
                marketplace.alice_id, marketplace.theme_id
            )

        async with session_factory() as db_session:
            repo = FavoriteRepository(db_session)
            assert await repo.count_theme_favorites(marketplace.theme_id) == 0
            assert await repo.get_theme_favorite(marketplace.alice_id, marketplace.theme_id) is None

    @pytest.mark.asyncio
    async def test_remove_plugin_favorite_after_plugin_deleted(self, session_factory, marketplace):
        async with session_factory() as db_session:
            await FavoriteService(db_session).add_plugin_favorite(
                marketplace.alice_id, marketplace.plugin_id
            )

        async with session_factory() as db_session:
            await db_session.execute(delete(Plugin).where(Plugin.id == marketplace.plugin_id))
            await db_session.commit()

        async with session_factory() as db_session:
            await FavoriteService(db_session).remove_plugin_favorite(
                marketplace.alice_id, marketplace.plugin_id
            )

        async with session_factory() as db_session:
            repo = FavoriteRepository(db_session)
            assert await repo.count_plugin_favorites(marketplace.plugin_id) == 0
            assert await repo.get_plugin_favorite(marketplace.alice_id, marketplace.plugin_id) is None
