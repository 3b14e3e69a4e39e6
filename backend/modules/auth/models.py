"""
Authentication module data models.

These models define the data structures used by the token service
and exposed to other modules through the interface.
"""

from enum import Enum
from pydantic import BaseModel, Field


class TokenType(str, Enum):
    """Kind of session token, carried in the `type` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenClaims(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Subject (account ID)")
    type: TokenType = Field(..., description="Token kind")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: str = Field(..., description="Unique token identifier")

    model_config = {"frozen": True}


class SessionTokens(BaseModel):
    """
    Access + refresh pair minted on login or successful verification.

    The HTTP layer returns the access token in the body and puts the
    refresh token in an HttpOnly cookie; it is never serialized to JSON.
    """

    access_token: str
    refresh_token: str = Field(..., exclude=True, repr=False)

    model_config = {"frozen": True}
