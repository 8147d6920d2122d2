"""
Core modules for the Theme Market API.

This package contains fundamental utilities used across the application:
- config: Application settings and configuration
- security: JWT token handling
- auth: Bearer-token resolution and access policy
- exceptions: Custom exception classes
"""

from .config import Settings, get_settings
from .exceptions import (
    AlreadyFavoritedError,
    AppException,
    AuthenticationError,
    AuthorizationError,
    DatabaseUnavailableError,
    FavoriteNotFoundError,
    FavoriteOperationError,
    NotFoundError,
    PluginNotFoundError,
    ThemeNotFoundError,
    UserNotFoundError,
    ValidationError,
)

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "ThemeNotFoundError",
    "PluginNotFoundError",
    "FavoriteNotFoundError",
    "AlreadyFavoritedError",
    "ValidationError",
    "FavoriteOperationError",
    "DatabaseUnavailableError",
]
