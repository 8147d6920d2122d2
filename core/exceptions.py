"""
Custom exception classes for the application.

All exceptions inherit from AppException and include:
- error_code: Machine-readable error code
- message: Human-readable error message
- status_code: HTTP status code to return
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors."""

    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class AuthenticationError(AppException):
    """Raised when authentication fails."""

    error_code = "authentication_failed"
    message = "Authentication required."
    status_code = 401


class AuthorizationError(AppException):
    """Raised when user lacks permission."""

    error_code = "authorization_failed"
    message = "Unauthorized access."
    status_code = 403


class NotFoundError(AppException):
    """Raised when a resource is not found."""

    error_code = "not_found"
    message = "Resource not found."
    status_code = 404


class UserNotFoundError(NotFoundError):
    error_code = "user_not_found"
    message = "User not found."


class ThemeNotFoundError(NotFoundError):
    error_code = "theme_not_found"
    message = "Theme not found."


class PluginNotFoundError(NotFoundError):
    error_code = "plugin_not_found"
    message = "Plugin not found."


class FavoriteNotFoundError(NotFoundError):
    """Raised when removing a favorite the user never added."""

    error_code = "favorite_not_found"
    message = "Favorite not found."


class AlreadyFavoritedError(AppException):
    """Raised when a user favorites the same entity twice."""

    error_code = "already_favorited"
    message = "Already favorited."
    status_code = 400


class ValidationError(AppException):
    """Raised when input validation fails."""

    error_code = "validation_error"
    message = "Invalid input"
    status_code = 422


class FavoriteOperationError(AppException):
    """Raised when a favorite write fails for an unexpected reason."""

    error_code = "favorite_operation_failed"
    message = "Failed to update favorites."
    status_code = 500


class DatabaseUnavailableError(AppException):
    """Raised when the database is not configured or not initialized."""

    error_code = "database_unavailable"
    message = "Database not configured"
    status_code = 503
