"""
Error taxonomy for the storefront core.

Service functions raise these instead of leaking storage or token library
errors; the application maps each kind to an HTTP status in one place.
"""

from typing import Any, Optional


INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StorefrontError):
    """Input shape or business-rule violation."""

    status_code = 400


class NotFoundError(StorefrontError):
    """No matching record."""

    status_code = 404


class AuthenticationError(StorefrontError):
    """
    Bad credentials, invalid or expired token, or inactive account.

    Every cause carries the same message so callers cannot tell them apart.
    """

    status_code = 401

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)


class AuthorizationError(StorefrontError):
    """Valid identity, insufficient role."""

    status_code = 403


class PersistenceError(StorefrontError):
    """Unexpected storage failure. The message is always generic."""

    status_code = 500


class ConflictError(PersistenceError):
    """Uniqueness constraint violation."""

    status_code = 409
