import pytest
from unittest.mock import MagicMock

from modules.cruises.interfaces import IJoinedCruiseRepository
from modules.cruises.repository import (
    InMemoryJoinedCruiseRepository,
    SupabaseJoinedCruiseRepository,
)


class TestSupabaseJoinedCruiseRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return SupabaseJoinedCruiseRepository(mock_db)

    def test_implements_interface(self, repo):
        assert isinstance(repo, IJoinedCruiseRepository)

    @pytest.mark.asyncio
    async def test_add_joined_cruise(self, repo, mock_db):
        await repo.add_joined_cruise("user-1", "cruise-1")

        mock_db.table.assert_called_with("joined_cruises")
        args, kwargs = mock_db.table.return_value.upsert.call_args
        assert args[0] == {"user_id": "user-1", "cruise_id": "cruise-1"}

    @pytest.mark.asyncio
    async def test_get_joined_cruises_by_user(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [{"cruise_id": "cruise-1"}, {"cruise_id": "cruise-2"}]

        assert await repo.get_joined_cruises_by_user("user-1") == ["cruise-1", "cruise-2"]
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with("user_id", "user-1")

    @pytest.mark.asyncio
    async def test_delete_joined_cruises_by_user(self, repo, mock_db):
        query = mock_db.table.return_value.delete.return_value.eq.return_value
        query.execute.return_value.data = [{"cruise_id": "cruise-1"}, {"cruise_id": "cruise-2"}]

        assert await repo.delete_joined_cruises_by_user("user-1") == 2
        mock_db.table.return_value.delete.return_value.eq.assert_called_once_with("user_id", "user-1")


class TestInMemoryJoinedCruiseRepository:
    @pytest.mark.asyncio
    async def test_memberships_per_user(self):
        repo = InMemoryJoinedCruiseRepository()
        await repo.add_joined_cruise("user-1", "cruise-b")
        await repo.add_joined_cruise("user-1", "cruise-a")
        await repo.add_joined_cruise("user-1", "cruise-a")
        await repo.add_joined_cruise("user-2", "cruise-a")

        assert await repo.get_joined_cruises_by_user("user-1") == ["cruise-a", "cruise-b"]

        assert await repo.delete_joined_cruises_by_user("user-1") == 2
        assert await repo.get_joined_cruises_by_user("user-1") == []
        assert await repo.get_joined_cruises_by_user("user-2") == ["cruise-a"]

    @pytest.mark.asyncio
    async def test_delete_without_memberships(self):
        assert await InMemoryJoinedCruiseRepository().delete_joined_cruises_by_user("user-1") == 0
