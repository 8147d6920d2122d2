"""
Repository layer for database access.

Provides async CRUD operations for all models.
"""

from .favorite_repo import FavoriteRepository
from .plugin_repo import PluginRepository
from .theme_repo import ThemeRepository
from .user_repo import UserRepository

__all__ = [
    "UserRepository",
    "ThemeRepository",
    "PluginRepository",
    "FavoriteRepository",
]
