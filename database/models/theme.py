"""
Theme model for marketplace themes.
"""

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .favorite import FavoriteTheme
    from .user import User


class Theme(Base, TimestampMixin):
    """
    A theme published to the marketplace.

    favorites_count is a denormalized copy of the number of FavoriteTheme
    rows pointing at this theme. It is only changed together with those rows.
    """

    __tablename__ = "themes"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    # Owner
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Engagement metrics
    favorites_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    versions_count: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="themes",
    )
    favorites: Mapped[list["FavoriteTheme"]] = relationship(
        "FavoriteTheme",
        back_populates="theme",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Theme(id={self.id}, name={self.name})>"


# Indexes
Index("idx_themes_user_id", Theme.user_id)
