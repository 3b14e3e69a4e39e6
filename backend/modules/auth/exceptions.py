"""
Authentication module exceptions.

These exceptions are raised by the token service and can be caught
by API error handlers to return appropriate HTTP responses.

A missing credential is an AuthenticationError (401); a credential that
was presented but fails verification is an AuthorizationError (403).
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthorizationError):
    """Raised when a token is malformed, mis-signed or of the wrong type."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthorizationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")
