"""
User model for marketplace accounts.
"""

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .favorite import FavoritePlugin, FavoriteTheme
    from .plugin import Plugin
    from .theme import Theme


class User(Base, TimestampMixin):
    """
    User model representing authenticated marketplace users.

    Rows are created by the account service; this API only reads them.
    """

    __tablename__ = "users"

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    display_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    avatar_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # "user" or "admin"
    role: Mapped[str] = mapped_column(
        String(20),
        default="user",
        server_default=text("'user'"),
        nullable=False,
    )

    # Relationships
    themes: Mapped[list["Theme"]] = relationship(
        "Theme",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    plugins: Mapped[list["Plugin"]] = relationship(
        "Plugin",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    favorite_themes: Mapped[list["FavoriteTheme"]] = relationship(
        "FavoriteTheme",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    favorite_plugins: Mapped[list["FavoritePlugin"]] = relationship(
        "FavoritePlugin",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
