"""
Favorite join models: which users favorited which themes and plugins.

Composite primary keys (user_id, theme_id) and (user_id, plugin_id), so a
user can favorite an entity at most once.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .base import Base

if TYPE_CHECKING:
    from .plugin import Plugin
    from .theme import Theme
    from .user import User


class FavoriteTheme(Base):
    __tablename__ = "favorite_themes"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    theme_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("themes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="favorite_themes",
    )
    theme: Mapped["Theme"] = relationship(
        "Theme",
        back_populates="favorites",
    )

    def __repr__(self) -> str:
        return f"<FavoriteTheme(user_id={self.user_id}, theme_id={self.theme_id})>"


class FavoritePlugin(Base):
    __tablename__ = "favorite_plugins"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    plugin_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("plugins.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="favorite_plugins",
    )
    plugin: Mapped["Plugin"] = relationship(
        "Plugin",
        back_populates="favorites",
    )

    def __repr__(self) -> str:
        return f"<FavoritePlugin(user_id={self.user_id}, plugin_id={self.plugin_id})>"


# Indexes for "who favorited this" lookups
Index("idx_favorite_themes_theme_id", FavoriteTheme.theme_id)
Index("idx_favorite_plugins_plugin_id", FavoritePlugin.plugin_id)
