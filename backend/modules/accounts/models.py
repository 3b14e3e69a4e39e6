"""
Accounts module data models.

Defines the account record as stored, the explicit partial-update patch,
and the request/response models for the account lifecycle endpoints.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.auth.models import SessionTokens

from .policy import EMAIL_COLUMN_LENGTH, NAME_MAX_LENGTH


# =============================================================================
# Stored record
# =============================================================================

class Account(BaseModel):
    """
    One registered identity.

    Verification state lives in three code fields shared by the email
    verification and password reset flows. The two flows never overlap:
    password reset requires a verified email, and verification stops
    touching the fields once the email is verified.
    """

    id: str = Field(..., description="Account ID (opaque, stable)")
    first_name: str
    last_name: str
    email: str = Field(..., description="Lowercased, unique")
    password_hash: str = Field(..., repr=False)

    email_verified: bool = False
    email_code: str = Field(default="", repr=False)
    email_code_expires_at: int = Field(default=0, description="Unix seconds, 0 when unset")
    email_code_attempts: int = 0

    profile_done: bool = False
    birth_date: Optional[date] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    snapchat: Optional[str] = None
    tiktok: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None

    created_at: Optional[datetime] = None


class NewAccount(BaseModel):
    """Fields supplied when an account row is created."""

    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=3, max_length=EMAIL_COLUMN_LENGTH)
    password_hash: str
    email_verified: bool = False
    email_code: str = ""
    email_code_expires_at: int = 0
    email_code_attempts: int
    profile_done: bool = False


class AccountPatch(BaseModel):
    """
    Partial update for an account row.

    One optional field per column. Only fields that were explicitly set
    are written; leaving a field out never clears it.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    password_hash: Optional[str] = None
    email_verified: Optional[bool] = None
    email_code: Optional[str] = Field(None, max_length=16)
    email_code_expires_at: Optional[int] = Field(None, ge=0)
    email_code_attempts: Optional[int] = Field(None, ge=0)
    profile_done: Optional[bool] = None
    birth_date: Optional[date] = None
    bio: Optional[str] = Field(None, max_length=500)
    instagram: Optional[str] = Field(None, max_length=100)
    snapchat: Optional[str] = Field(None, max_length=100)
    tiktok: Optional[str] = Field(None, max_length=100)
    twitter: Optional[str] = Field(None, max_length=100)
    facebook: Optional[str] = Field(None, max_length=100)

    def changes(self) -> dict[str, Any]:
        """Fields that were explicitly set, as Python values."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def to_row(self) -> dict[str, Any]:
        """Fields that were explicitly set, JSON-encoded for the store."""
        return self.model_dump(mode="json", include=self.model_fields_set)

    def is_empty(self) -> bool:
        return not self.model_fields_set


# =============================================================================
# Service results
# =============================================================================

class CodeDispatch(str, Enum):
    """Outcome of a send-code request."""

    SENT = "sent"
    EXISTING_CODE_VALID = "existing_code_valid"
    ALREADY_VERIFIED = "already_verified"


class VerificationResult(BaseModel):
    """Outcome of a successful verification-code check."""

    already_verified: bool = False
    tokens: Optional[SessionTokens] = None


# =============================================================================
# API models
# =============================================================================

class CamelModel(BaseModel):
    """Request/response body using the frontend's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    first_name: str
    last_name: str
    email: str
    password: str


class SendCodeRequest(CamelModel):
    email: str
    force_resend: bool = False


class CheckCodeRequest(CamelModel):
    email: str
    email_code: str = Field(..., max_length=16)


class LoginRequest(CamelModel):
    email: str
    password: str


class CheckPasswordResetRequest(CamelModel):
    email: str
    email_code: str = Field(..., max_length=16)
    new_password: str


class MessageResponse(CamelModel):
    message: str
    code: Optional[str] = None


class AccessTokenResponse(CamelModel):
    message: str
    access_token: Optional[str] = None
