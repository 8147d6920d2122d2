"""
Pydantic schemas for API request/response models.
"""

from .common import (
    APIResponse,
    ErrorDetail,
    HealthStatus,
    HealthCheckResponse,
    ReadinessResponse,
    ComponentHealth,
)

from .users import (
    UserProfile,
    ThemeInfo,
    PluginInfo,
    FavoriteThemeInfo,
    FavoritePluginInfo,
    AddFavoriteThemeRequest,
    AddFavoritePluginRequest,
    FavoriteCountInfo,
)

__all__ = [
    # Common
    "APIResponse",
    "ErrorDetail",
    "HealthStatus",
    "HealthCheckResponse",
    "ReadinessResponse",
    "ComponentHealth",
    # Users
    "UserProfile",
    "ThemeInfo",
    "PluginInfo",
    "FavoriteThemeInfo",
    "FavoritePluginInfo",
    "AddFavoriteThemeRequest",
    "AddFavoritePluginRequest",
    "FavoriteCountInfo",
]
