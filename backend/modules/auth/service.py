"""
Session token service implementation.

Mints and verifies the signed JWTs that carry a session: short-lived access
tokens presented as bearer credentials and long-lived refresh tokens kept in
an HttpOnly cookie.
"""

import time
import uuid
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings

from .interfaces import ITokenService
from .models import SessionTokens, TokenClaims, TokenType
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class TokenService(ITokenService):
    """
    Implementation of the session token service.

    Access and refresh tokens are signed with different secrets and carry a
    `type` claim, so one can never stand in for the other.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._settings = settings or get_settings()
        self._clock = clock

        if not self._settings.jwt_access_secret or not self._settings.jwt_refresh_secret:
            raise RuntimeError(
                "Token signing not configured. "
                "Set JWT_ACCESS_SECRET and JWT_REFRESH_SECRET environment variables."
            )

        self._secrets = {
            TokenType.ACCESS: self._settings.jwt_access_secret,
            TokenType.REFRESH: self._settings.jwt_refresh_secret,
        }
        self._lifetimes = {
            TokenType.ACCESS: self._settings.access_token_expire_minutes * 60,
            TokenType.REFRESH: self._settings.refresh_token_expire_days * 24 * 60 * 60,
        }

    def _issue(self, user_id: str, token_type: TokenType) -> str:
        now = int(self._clock())
        payload = {
            "sub": user_id,
            "type": token_type.value,
            "iat": now,
            "exp": now + self._lifetimes[token_type],
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(
            payload,
            self._secrets[token_type],
            algorithm=self._settings.jwt_algorithm,
        )

    def issue_access_token(self, user_id: str) -> str:
        """Mint a short-lived access token."""
        return self._issue(user_id, TokenType.ACCESS)

    def issue_refresh_token(self, user_id: str) -> str:
        """Mint a long-lived refresh token."""
        return self._issue(user_id, TokenType.REFRESH)

    def issue_session(self, user_id: str) -> SessionTokens:
        """Mint an access + refresh pair for a freshly authenticated account."""
        return SessionTokens(
            access_token=self.issue_access_token(user_id),
            refresh_token=self.issue_refresh_token(user_id),
        )

    def verify(self, token: str, expected_type: TokenType = TokenType.ACCESS) -> TokenClaims:
        """
        Verify a token and return its claims.

        Signature and expiry are checked by PyJWT against the secret for
        `expected_type`; the `type` claim must match as well.
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secrets[expected_type],
                algorithms=[self._settings.jwt_algorithm],
                options={"require": ["sub", "type", "iat", "exp", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: malformed claims")

        if claims.type != expected_type:
            raise InvalidTokenError(f"Invalid token: expected {expected_type.value} token")

        return claims

    def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token."""
        claims = self.verify(refresh_token, expected_type=TokenType.REFRESH)
        return self.issue_access_token(claims.sub)


# Module-level instance getter
_service_instance: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Get the token service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = TokenService()
    return _service_instance


def reset_token_service() -> None:
    """Reset the token service singleton (for testing)."""
    global _service_instance
    _service_instance = None
