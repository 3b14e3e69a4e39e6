"""
Joined-cruise repository for database access.

Encapsulates Supabase queries for the `joined_cruises` table, plus an
in-memory implementation for local development and tests.
"""

from shared.repository import BaseRepository, store_operation

JOINED_CRUISES_TABLE = "joined_cruises"


class SupabaseJoinedCruiseRepository(BaseRepository[str]):
    """Repository for joined-cruise records."""

    @store_operation("add_joined_cruise")
    async def add_joined_cruise(self, user_id: str, cruise_id: str) -> None:
        self._db.table(JOINED_CRUISES_TABLE).upsert(
            {"user_id": user_id, "cruise_id": cruise_id},
            on_conflict="user_id,cruise_id",
        ).execute()

    @store_operation("get_joined_cruises_by_user")
    async def get_joined_cruises_by_user(self, user_id: str) -> list[str]:
        result = self._db.table(JOINED_CRUISES_TABLE).select("cruise_id").eq("user_id", user_id).execute()
        return [str(row["cruise_id"]) for row in result.data]

    @store_operation("delete_joined_cruises_by_user")
    async def delete_joined_cruises_by_user(self, user_id: str) -> int:
        result = self._db.table(JOINED_CRUISES_TABLE).delete().eq("user_id", user_id).execute()
        return len(result.data)


class InMemoryJoinedCruiseRepository:
    """
    Joined-cruise repository with in-memory storage.

    For testing and development. Use SupabaseJoinedCruiseRepository for production.
    """

    def __init__(self) -> None:
        self._memberships: set[tuple[str, str]] = set()

    async def add_joined_cruise(self, user_id: str, cruise_id: str) -> None:
        self._memberships.add((user_id, cruise_id))

    async def get_joined_cruises_by_user(self, user_id: str) -> list[str]:
        return sorted(cruise for user, cruise in self._memberships if user == user_id)

    async def delete_joined_cruises_by_user(self, user_id: str) -> int:
        removed = {m for m in self._memberships if m[0] == user_id}
        self._memberships -= removed
        return len(removed)
