"""
Authentication module.

Issues, verifies and refreshes session tokens.

Public API:
- ITokenService: Interface for token operations
- TokenClaims / SessionTokens / TokenType: Token models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, MissingTokenError
"""

from .interfaces import ITokenService
from .models import TokenClaims, SessionTokens, TokenType
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

__all__ = [
    # Interface
    "ITokenService",
    # Models
    "TokenClaims",
    "SessionTokens",
    "TokenType",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
]
