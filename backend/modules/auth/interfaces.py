"""
Authentication module interface.

Other modules should depend on ITokenService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, runtime_checkable

from .models import SessionTokens, TokenClaims, TokenType


@runtime_checkable
class ITokenService(Protocol):
    """
    Interface for session token operations.

    Tokens are not persisted; everything needed to verify one is inside it.
    """

    def issue_access_token(self, user_id: str) -> str:
        """Mint a short-lived access token for the account."""
        ...

    def issue_refresh_token(self, user_id: str) -> str:
        """Mint a long-lived refresh token for the account."""
        ...

    def issue_session(self, user_id: str) -> SessionTokens:
        """Mint an access + refresh pair."""
        ...

    def verify(self, token: str, expected_type: TokenType = TokenType.ACCESS) -> TokenClaims:
        """
        Verify a token's signature, expiry and type.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If signature or type is wrong
        """
        ...

    def refresh(self, refresh_token: str) -> str:
        """
        Exchange a valid refresh token for a new access token.

        The refresh token itself is not re-issued or extended.
        """
        ...
