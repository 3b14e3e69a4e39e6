"""
Profiles module.

Profile reads, edits and the completion check for the signed-in user.

Public API:
- IProfileService: Interface for profile operations
- UserData / UpdateProfileRequest: Profile models
"""

from .interfaces import IProfileService
from .models import UserData, UpdateProfileRequest, ProfileDoneResponse
from .exceptions import InvalidBirthDateError, InvalidProfileError

__all__ = [
    "IProfileService",
    "UserData",
    "UpdateProfileRequest",
    "ProfileDoneResponse",
    "InvalidBirthDateError",
    "InvalidProfileError",
]
