"""
Account repository for database access.

Encapsulates all Supabase queries and data mapping for the `accounts`
table, plus an in-memory implementation with the same semantics for
local development and tests.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from postgrest import APIError

from shared.repository import BaseRepository, store_operation
from .models import Account, AccountPatch, NewAccount
from .exceptions import AccountNotFoundError, DuplicateEmailError

logger = logging.getLogger(__name__)

ACCOUNTS_TABLE = "accounts"
CONSUME_ATTEMPT_FUNCTION = "consume_email_code_attempt"
UNIQUE_VIOLATION = "23505"


class SupabaseAccountRepository(BaseRepository[Account]):
    """
    Repository for account data access.

    Handles all database operations for accounts. All methods return
    Pydantic models with proper mapping from database rows.

    Note: This repository does NOT normalize or validate input beyond the
    column limits enforced by the patch model. The service layer owns that.
    """

    # -------------------------------------------------------------------------
    # Account CRUD operations
    # -------------------------------------------------------------------------

    @store_operation("create_account")
    async def create_account(self, account: NewAccount) -> str:
        """
        Create a new account record.

        Returns:
            The generated account ID.
        """
        try:
            result = self._db.table(ACCOUNTS_TABLE).insert(account.model_dump(mode="json")).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateEmailError()
            raise
        return str(result.data[0]["id"])

    @store_operation("get_account_by_email")
    async def get_account_by_email(self, email: str) -> Account:
        """Get an account by its (already normalized) email."""
        result = self._db.table(ACCOUNTS_TABLE).select("*").eq("email", email).limit(1).execute()

        if not result.data:
            raise AccountNotFoundError()

        return self._map_to_account(result.data[0])

    @store_operation("get_account_by_id")
    async def get_account_by_id(self, account_id: str) -> Account:
        """Get an account by ID."""
        result = self._db.table(ACCOUNTS_TABLE).select("*").eq("id", account_id).limit(1).execute()

        if not result.data:
            raise AccountNotFoundError(f"Account not found: {account_id}")

        return self._map_to_account(result.data[0])

    @store_operation("update_account")
    async def update_account(self, account_id: str, patch: AccountPatch) -> None:
        """
        Update only the columns set on the patch.

        An empty patch still checks that the account exists.
        """
        if patch.is_empty():
            result = self._db.table(ACCOUNTS_TABLE).select("id").eq("id", account_id).execute()
        else:
            result = self._db.table(ACCOUNTS_TABLE).update(patch.to_row()).eq("id", account_id).execute()

        if not result.data:
            raise AccountNotFoundError(f"Account not found: {account_id}")

    @store_operation("consume_code_attempt")
    async def consume_code_attempt(self, account_id: str) -> int:
        """
        Increment the attempt counter in one statement.

        The database function returns the counter as it was before the
        increment, or NULL when the account does not exist.
        """
        result = self._db.rpc(CONSUME_ATTEMPT_FUNCTION, {"p_account_id": account_id}).execute()

        if result.data is None:
            raise AccountNotFoundError(f"Account not found: {account_id}")

        return int(result.data)

    @store_operation("delete_account")
    async def delete_account(self, account_id: str) -> None:
        """Delete an account row."""
        result = self._db.table(ACCOUNTS_TABLE).delete().eq("id", account_id).execute()

        if not result.data:
            raise AccountNotFoundError(f"Account not found: {account_id}")

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map database row to Account model."""
        return Account(
            id=str(data["id"]),
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            password_hash=data["password_hash"],
            email_verified=data.get("email_verified", False),
            email_code=data.get("email_code") or "",
            email_code_expires_at=data.get("email_code_expires_at") or 0,
            email_code_attempts=data.get("email_code_attempts", 0),
            profile_done=data.get("profile_done", False),
            birth_date=data.get("birth_date"),
            bio=data.get("bio"),
            instagram=data.get("instagram"),
            snapchat=data.get("snapchat"),
            tiktok=data.get("tiktok"),
            twitter=data.get("twitter"),
            facebook=data.get("facebook"),
            created_at=data.get("created_at"),
        )


class InMemoryAccountRepository:
    """
    Account repository with in-memory storage.

    For testing and development. Use SupabaseAccountRepository for production.
    Each method runs without awaiting, so read-modify-write sequences are
    atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def create_account(self, account: NewAccount) -> str:
        if any(a.email == account.email for a in self._accounts.values()):
            raise DuplicateEmailError()

        account_id = str(uuid.uuid4())
        self._accounts[account_id] = Account(
            id=account_id,
            created_at=datetime.now(timezone.utc),
            **account.model_dump(),
        )
        return account_id

    async def get_account_by_email(self, email: str) -> Account:
        for account in self._accounts.values():
            if account.email == email:
                return account
        raise AccountNotFoundError()

    async def get_account_by_id(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found: {account_id}")
        return account

    async def update_account(self, account_id: str, patch: AccountPatch) -> None:
        account = await self.get_account_by_id(account_id)
        self._accounts[account_id] = account.model_copy(update=patch.changes())

    async def consume_code_attempt(self, account_id: str) -> int:
        account = await self.get_account_by_id(account_id)
        previous = account.email_code_attempts
        self._accounts[account_id] = account.model_copy(
            update={"email_code_attempts": previous + 1}
        )
        return previous

    async def delete_account(self, account_id: str) -> None:
        if self._accounts.pop(account_id, None) is None:
            raise AccountNotFoundError(f"Account not found: {account_id}")
