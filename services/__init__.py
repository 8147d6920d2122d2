"""
Services module for the Theme Market API.
"""
from .favorite_service import FavoriteService

__all__ = ["FavoriteService"]
