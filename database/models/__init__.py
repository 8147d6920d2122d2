"""
SQLAlchemy models for the Theme Market API.
"""

from .base import Base, TimestampMixin
from .favorite import FavoritePlugin, FavoriteTheme
from .plugin import Plugin
from .theme import Theme
from .user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Models
    "User",
    "Theme",
    "Plugin",
    "FavoriteTheme",
    "FavoritePlugin",
]
