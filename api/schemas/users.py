"""
Pydantic schemas for the users API (profile, themes, favorites).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============ Entity Schemas ============


class UserProfile(BaseModel):
    """Public profile of a user."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Unique username")
    email: str | None = Field(None, description="Email address")
    display_name: str | None = Field(None, description="Display name")
    avatar_url: str | None = Field(None, description="Avatar URL")
    role: str = Field(..., description="Account role (user or admin)")
    created_at: datetime = Field(..., description="Account creation timestamp")


class ThemeInfo(BaseModel):
    """Theme information."""

    id: str = Field(..., description="Theme ID")
    name: str = Field(..., description="Theme name")
    description: str | None = Field(None, description="Theme description")
    favorites_count: int = Field(default=0, description="Number of users who favorited it")
    versions_count: int = Field(default=0, description="Number of published versions")


class PluginInfo(BaseModel):
    """Plugin information."""

    id: str = Field(..., description="Plugin ID")
    name: str = Field(..., description="Plugin name")
    description: str | None = Field(None, description="Plugin description")
    favorites_count: int = Field(default=0, description="Number of users who favorited it")
    versions_count: int = Field(default=0, description="Number of published versions")


class FavoriteThemeInfo(BaseModel):
    """A favorited theme with the time it was favorited."""

    theme: ThemeInfo
    created_at: datetime = Field(..., description="When the theme was favorited")


class FavoritePluginInfo(BaseModel):
    """A favorited plugin with the time it was favorited."""

    plugin: PluginInfo
    created_at: datetime = Field(..., description="When the plugin was favorited")


# ============ Request Schemas ============


class AddFavoriteThemeRequest(BaseModel):
    """Request for adding a theme to favorites."""

    model_config = ConfigDict(populate_by_name=True)

    theme_id: str = Field(..., alias="themeId", min_length=1, description="Theme ID")

    @field_validator("theme_id", mode="before")
    @classmethod
    def stringify_theme_id(cls, v: Any) -> Any:
        """Accept numeric ids and look them up as strings."""
        return str(v) if isinstance(v, int) else v


class AddFavoritePluginRequest(BaseModel):
    """Request for adding a plugin to favorites."""

    model_config = ConfigDict(populate_by_name=True)

    plugin_id: str = Field(..., alias="pluginId", min_length=1, description="Plugin ID")

    @field_validator("plugin_id", mode="before")
    @classmethod
    def stringify_plugin_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class FavoriteCountInfo(BaseModel):
    """Counter state returned after adding a favorite."""

    id: str
    favorites_count: int
