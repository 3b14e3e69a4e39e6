"""
Profiles module data models.
"""

from typing import Optional

from pydantic import ConfigDict

from modules.accounts.models import CamelModel


class UserData(CamelModel):
    """Basic identity shown to the signed-in user."""

    first_name: str
    last_name: str
    email: str


class UpdateProfileRequest(CamelModel):
    """
    Profile fields a user may change.

    Only fields present in the request body are written. Unknown fields
    are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birth_date: Optional[str] = None
    bio: Optional[str] = None
    instagram: Optional[str] = None
    snapchat: Optional[str] = None
    tiktok: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None


class ProfileDoneResponse(CamelModel):
    profile_done: bool
