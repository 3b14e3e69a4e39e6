"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated by the request gate from a verified access token and made
    available to route handlers via dependency injection. Only the claims
    carried by the token are present; anything else is loaded on demand.
    """

    id: str = Field(..., description="Account ID (token subject)")
    issued_at: datetime = Field(..., description="When the access token was issued")
    expires_at: datetime = Field(..., description="When the access token expires")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
