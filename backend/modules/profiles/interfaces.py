"""
Profiles module interface.
"""

from typing import Protocol, runtime_checkable

from .models import UpdateProfileRequest, UserData


@runtime_checkable
class IProfileService(Protocol):
    """Profile reads and edits for the signed-in user."""

    async def get_user_data(self, user_id: str) -> UserData:
        """Get name and email for an account."""
        ...

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> None:
        """Apply the fields present in the request."""
        ...

    async def is_profile_done(self, user_id: str) -> bool:
        """Whether the profile has every field needed to join cruises."""
        ...
