"""
Base exception classes for the Shipmates backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API
layer maps each base class to one HTTP status code.
"""

from typing import Optional, Any


class ShipmatesError(Exception):
    """
    Base exception for all Shipmates errors.

    All custom exceptions should inherit from this class.
    """

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


class NotFoundError(ShipmatesError):
    """Resource not found."""

    pass


class ValidationError(ShipmatesError):
    """Input validation failed."""

    pass


class ConflictError(ShipmatesError):
    """Resource already exists or conflicts with current state."""

    pass


class AuthenticationError(ShipmatesError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ShipmatesError):
    """Authorization failed (credential present but rejected)."""

    pass


class ExternalServiceError(ShipmatesError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreUnavailableError(ExternalServiceError):
    """The backing data store could not be reached."""

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(
            f"Data store unavailable during {operation}",
            service="store",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )
