"""
Plugin model for marketplace plugins.
"""

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .favorite import FavoritePlugin
    from .user import User


class Plugin(Base, TimestampMixin):
    """A plugin published to the marketplace."""

    __tablename__ = "plugins"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    favorites_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    versions_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )

    owner: Mapped["User"] = relationship(
        "User",
        back_populates="plugins",
    )
    favorites: Mapped[list["FavoritePlugin"]] = relationship(
        "FavoritePlugin",
        back_populates="plugin",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Plugin(id={self.id}, name={self.name})>"


Index("idx_plugins_user_id", Plugin.user_id)
