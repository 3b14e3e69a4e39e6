"""
Tests for the account repositories.

The Supabase repository is tested against a MagicMock client; the
in-memory repository is tested directly.
"""

import pytest
from unittest.mock import MagicMock
from postgrest import APIError

from modules.accounts.exceptions import AccountNotFoundError, DuplicateEmailError
from modules.accounts.models import AccountPatch, NewAccount
from modules.accounts.repository import InMemoryAccountRepository, SupabaseAccountRepository
from shared.exceptions import StoreUnavailableError


def _new_account(email: str = "ann@x.com") -> NewAccount:
    return NewAccount(
        first_name="Ann",
        last_name="Lee",
        email=email,
        password_hash="$2b$04$hash",
        email_code_attempts=5,
    )


def _row(**overrides) -> dict:
    row = {
        "id": "acc-1",
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "ann@x.com",
        "password_hash": "$2b$04$hash",
        "email_verified": False,
        "email_code": None,
        "email_code_expires_at": None,
        "email_code_attempts": 5,
        "profile_done": False,
        "birth_date": None,
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestSupabaseAccountRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return SupabaseAccountRepository(mock_db)

    @pytest.mark.asyncio
    async def test_create_account(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [{"id": "acc-1"}]

        account_id = await repo.create_account(_new_account())

        assert account_id == "acc-1"
        mock_db.table.assert_called_with("accounts")
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted["email"] == "ann@x.com"
        assert inserted["email_code_attempts"] == 5

    @pytest.mark.asyncio
    async def test_create_account_duplicate_email(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"message": "duplicate key value", "code": "23505"}
        )

        with pytest.raises(DuplicateEmailError):
            await repo.create_account(_new_account())

    @pytest.mark.asyncio
    async def test_create_account_other_store_error(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"message": "permission denied", "code": "42501"}
        )

        with pytest.raises(StoreUnavailableError):
            await repo.create_account(_new_account())

    @pytest.mark.asyncio
    async def test_get_account_by_email_maps_row(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [_row()]

        account = await repo.get_account_by_email("ann@x.com")

        assert account.id == "acc-1"
        assert account.email_code == ""
        assert account.email_code_expires_at == 0
        mock_db.table.return_value.select.return_value.eq.assert_called_with("email", "ann@x.com")

    @pytest.mark.asyncio
    async def test_get_account_by_email_not_found(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = []

        with pytest.raises(AccountNotFoundError):
            await repo.get_account_by_email("nobody@x.com")

    @pytest.mark.asyncio
    async def test_get_account_by_id_not_found(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = []

        with pytest.raises(AccountNotFoundError):
            await repo.get_account_by_id("missing")

    @pytest.mark.asyncio
    async def test_update_account_writes_only_patch_fields(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [{"id": "acc-1"}]

        await repo.update_account("acc-1", AccountPatch(email_verified=True, email_code=""))

        mock_db.table.return_value.update.assert_called_once_with({"email_verified": True, "email_code": ""})
        mock_db.table.return_value.update.return_value.eq.assert_called_once_with("id", "acc-1")

    @pytest.mark.asyncio
    async def test_update_account_not_found(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(AccountNotFoundError):
            await repo.update_account("missing", AccountPatch(profile_done=True))

    @pytest.mark.asyncio
    async def test_empty_update_checks_existence(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(AccountNotFoundError):
            await repo.update_account("missing", AccountPatch())

        mock_db.table.return_value.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_consume_code_attempt_calls_function(self, repo, mock_db):
        mock_db.rpc.return_value.execute.return_value.data = 2

        previous = await repo.consume_code_attempt("acc-1")

        assert previous == 2
        mock_db.rpc.assert_called_once_with("consume_email_code_attempt", {"p_account_id": "acc-1"})

    @pytest.mark.asyncio
    async def test_consume_code_attempt_not_found(self, repo, mock_db):
        mock_db.rpc.return_value.execute.return_value.data = None

        with pytest.raises(AccountNotFoundError):
            await repo.consume_code_attempt("missing")

    @pytest.mark.asyncio
    async def test_delete_account(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = [{"id": "acc-1"}]

        await repo.delete_account("acc-1")

        mock_db.table.return_value.delete.return_value.eq.assert_called_once_with("id", "acc-1")

    @pytest.mark.asyncio
    async def test_delete_account_not_found(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(AccountNotFoundError):
            await repo.delete_account("missing")


class TestInMemoryAccountRepository:
    @pytest.fixture
    def repo(self):
        return InMemoryAccountRepository()

    @pytest.mark.asyncio
    async def test_create_and_get(self, repo):
        account_id = await repo.create_account(_new_account())

        by_id = await repo.get_account_by_id(account_id)
        by_email = await repo.get_account_by_email("ann@x.com")

        assert by_id == by_email
        assert by_id.email_code_attempts == 5
        assert by_id.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, repo):
        await repo.create_account(_new_account())
        with pytest.raises(DuplicateEmailError):
            await repo.create_account(_new_account())

    @pytest.mark.asyncio
    async def test_update_only_changes_patch_fields(self, repo):
        account_id = await repo.create_account(_new_account())

        await repo.update_account(account_id, AccountPatch(bio="Sailor"))

        account = await repo.get_account_by_id(account_id)
        assert account.bio == "Sailor"
        assert account.first_name == "Ann"

    @pytest.mark.asyncio
    async def test_consume_returns_previous_value(self, repo):
        account_id = await repo.create_account(_new_account())
        await repo.update_account(account_id, AccountPatch(email_code_attempts=0))

        assert await repo.consume_code_attempt(account_id) == 0
        assert await repo.consume_code_attempt(account_id) == 1
        assert (await repo.get_account_by_id(account_id)).email_code_attempts == 2

    @pytest.mark.asyncio
    async def test_missing_account(self, repo):
        with pytest.raises(AccountNotFoundError):
            await repo.update_account("missing", AccountPatch(bio="x"))
        with pytest.raises(AccountNotFoundError):
            await repo.consume_code_attempt("missing")
        with pytest.raises(AccountNotFoundError):
            await repo.delete_account("missing")

    @pytest.mark.asyncio
    async def test_delete(self, repo):
        account_id = await repo.create_account(_new_account())
        await repo.delete_account(account_id)
        with pytest.raises(AccountNotFoundError):
            await repo.get_account_by_id(account_id)
