"""
Cruises module interface.

The accounts module depends on IJoinedCruiseRepository to remove a user's
memberships before the account row itself is deleted.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IJoinedCruiseRepository(Protocol):
    """Records linking a user to the cruises they joined."""

    async def add_joined_cruise(self, user_id: str, cruise_id: str) -> None:
        """Record that a user joined a cruise."""
        ...

    async def get_joined_cruises_by_user(self, user_id: str) -> list[str]:
        """List cruise IDs joined by a user."""
        ...

    async def delete_joined_cruises_by_user(self, user_id: str) -> int:
        """
        Remove every membership of a user.

        Returns:
            Number of records removed
        """
        ...
