"""
JWT Authentication middleware.

Validates access tokens issued by the token service and resolves the
caller's identity for protected routes.

A missing or malformed Authorization header is a 401; a token that is
present but invalid or expired is a 403.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import ITokenService
from modules.auth.models import TokenClaims
from shared.models import AuthenticatedUser

from ..dependencies import get_token_service

# Bearer token extractor. auto_error=False so a missing header reaches
# get_current_user and is reported with our own error body.
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_from_claims(claims: TokenClaims) -> AuthenticatedUser:
    """
    Convert verified token claims to an AuthenticatedUser.

    Args:
        claims: Claims of a verified access token

    Returns:
        AuthenticatedUser instance
    """
    return AuthenticatedUser(
        id=claims.sub,
        issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ITokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.post("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        MissingTokenError: No usable bearer header (401)
        InvalidTokenError / ExpiredTokenError: Token rejected (403)
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError("Missing authorization header")

    claims = tokens.verify(credentials.credentials)
    return get_user_from_claims(claims)
