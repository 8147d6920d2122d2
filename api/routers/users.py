"""
Users router for profiles, owned themes and favorites.

Endpoints:
- GET /api/users/profile - User profile
- GET /api/users/themes - Themes owned by the user
- GET /api/users/themes/favorited - List favorite themes
- POST /api/users/themes/favorited - Add favorite theme
- DELETE /api/users/themes/favorited/{theme_id} - Remove favorite theme
- GET /api/users/plugins/favorited - List favorite plugins
- POST /api/users/plugins/favorited - Add favorite plugin
- DELETE /api/users/plugins/favorited/{plugin_id} - Remove favorite plugin

Read endpoints take an optional ``userId`` query parameter. Only the user
themselves or an admin may read someone's data.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import (
    get_favorite_service,
    get_theme_repository,
    get_user_repository,
    require_current_user,
)
from api.schemas.common import APIResponse
from api.schemas.users import (
    AddFavoritePluginRequest,
    AddFavoriteThemeRequest,
    FavoriteCountInfo,
    FavoritePluginInfo,
    FavoriteThemeInfo,
    PluginInfo,
    ThemeInfo,
    UserProfile,
)
from core.auth import resolve_target_user_id
from core.exceptions import UserNotFoundError
from database.models import FavoritePlugin, FavoriteTheme, Plugin, Theme, User
from database.repositories import ThemeRepository, UserRepository
from services.favorite_service import FavoriteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


# ============ Helpers ============


def user_to_profile(user: User) -> UserProfile:
    """Convert database user to response model."""
    return UserProfile(
        id=str(user.id),
        username=user.username,
        email=user.email,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        role=user.role,
        created_at=user.created_at,
    )


def theme_to_info(theme: Theme) -> ThemeInfo:
    return ThemeInfo(
        id=str(theme.id),
        name=theme.name,
        description=theme.description,
        favorites_count=theme.favorites_count,
        versions_count=theme.versions_count,
    )


def plugin_to_info(plugin: Plugin) -> PluginInfo:
    return PluginInfo(
        id=str(plugin.id),
        name=plugin.name,
        description=plugin.description,
        favorites_count=plugin.favorites_count,
        versions_count=plugin.versions_count,
    )


def favorite_theme_to_info(favorite: FavoriteTheme) -> FavoriteThemeInfo:
    return FavoriteThemeInfo(
        theme=theme_to_info(favorite.theme),
        created_at=favorite.created_at,
    )


def favorite_plugin_to_info(favorite: FavoritePlugin) -> FavoritePluginInfo:
    return FavoritePluginInfo(
        plugin=plugin_to_info(favorite.plugin),
        created_at=favorite.created_at,
    )


async def get_target_user(
    user: User,
    query_user_id: str | None,
    user_repo: UserRepository,
) -> User:
    """
    Resolve whose data is requested and load that user.

    Raises 403 for a non-admin asking about someone else, and 404 when an
    admin names a user that does not exist.
    """
    target_id: UUID = resolve_target_user_id(user, query_user_id)
    if target_id == user.id:
        return user

    target = await user_repo.get_by_id(target_id)
    if not target:
        raise UserNotFoundError()
    return target


# ============ Profile Endpoints ============


@router.get("/profile", response_model=APIResponse[UserProfile])
async def get_user_profile(
    user_id: str | None = Query(default=None, alias="userId"),
    user: User = Depends(require_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
):
    """Get the profile of the current user, or of any user for admins."""
    target = await get_target_user(user, user_id, user_repo)
    return APIResponse.ok(user_to_profile(target), message="User data fetched successfully.")


@router.get("/themes", response_model=APIResponse[list[ThemeInfo]])
async def get_user_themes(
    user_id: str | None = Query(default=None, alias="userId"),
    user: User = Depends(require_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
    theme_repo: ThemeRepository = Depends(get_theme_repository),
):
    """List themes owned by a user."""
    target = await get_target_user(user, user_id, user_repo)
    themes = await theme_repo.list_by_user(target.id)
    return APIResponse.ok(
        [theme_to_info(t) for t in themes],
        message="User themes fetched successfully.",
    )


# ============ Favorite Theme Endpoints ============


@router.get("/themes/favorited", response_model=APIResponse[list[FavoriteThemeInfo]])
async def get_user_favorite_themes(
    user_id: str | None = Query(default=None, alias="userId"),
    user: User = Depends(require_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """List themes a user favorited."""
    target = await get_target_user(user, user_id, user_repo)
    favorites = await favorite_service.list_theme_favorites(target.id)
    return APIResponse.ok(
        [favorite_theme_to_info(f) for f in favorites],
        message="User favorite themes fetched successfully.",
    )


@router.post(
    "/themes/favorited",
    response_model=APIResponse[FavoriteCountInfo],
    status_code=201,
)
async def add_user_favorite_theme(
    request: AddFavoriteThemeRequest,
    user: User = Depends(require_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """Add a theme to the current user's favorites."""
    count = await favorite_service.add_theme_favorite(user.id, request.theme_id)
    return APIResponse.ok(
        FavoriteCountInfo(id=request.theme_id, favorites_count=count),
        message="Added theme to favorites successfully.",
    )


@router.delete("/themes/favorited/{theme_id}", response_model=APIResponse[None])
async def remove_user_favorite_theme(
    theme_id: str,
    user: User = Depends(require_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """Remove a theme from the current user's favorites."""
    await favorite_service.remove_theme_favorite(user.id, theme_id)
    return APIResponse.ok(None, message="Removed theme from favorites successfully.")


# ============ Favorite Plugin Endpoints ============


@router.get("/plugins/favorited", response_model=APIResponse[list[FavoritePluginInfo]])
async def get_user_favorite_plugins(
    user_id: str | None = Query(default=None, alias="userId"),
    user: User = Depends(require_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """List plugins a user favorited."""
    target = await get_target_user(user, user_id, user_repo)
    favorites = await favorite_service.list_plugin_favorites(target.id)
    return APIResponse.ok(
        [favorite_plugin_to_info(f) for f in favorites],
        message="User favorite plugins fetched successfully.",
    )


@router.post(
    "/plugins/favorited",
    response_model=APIResponse[FavoriteCountInfo],
    status_code=201,
)
async def add_user_favorite_plugin(
    request: AddFavoritePluginRequest,
    user: User = Depends(require_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """Add a plugin to the current user's favorites."""
    count = await favorite_service.add_plugin_favorite(user.id, request.plugin_id)
    return APIResponse.ok(
        FavoriteCountInfo(id=request.plugin_id, favorites_count=count),
        message="Added plugin to favorites successfully.",
    )


@router.delete("/plugins/favorited/{plugin_id}", response_model=APIResponse[None])
async def remove_user_favorite_plugin(
    plugin_id: str,
    user: User = Depends(require_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    """Remove a plugin from the current user's favorites."""
    await favorite_service.remove_plugin_favorite(user.id, plugin_id)
    return APIResponse.ok(None, message="Removed plugin from favorites successfully.")
