"""
Accounts module interfaces.

IAccountRepository is the credential store adapter consumed by the
lifecycle engine; IAccountService is what the HTTP layer and other
modules depend on.
"""

from typing import Protocol, runtime_checkable

from modules.auth.models import SessionTokens

from .models import Account, AccountPatch, CodeDispatch, NewAccount, VerificationResult


@runtime_checkable
class IAccountRepository(Protocol):
    """
    Credential store adapter.

    Every operation is a single logical call: retries on transient
    connectivity errors happen inside the adapter, and a call either
    succeeds or raises.
    """

    async def create_account(self, account: NewAccount) -> str:
        """
        Insert a new account row.

        Returns:
            The new account ID

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def get_account_by_email(self, email: str) -> Account:
        """
        Raises:
            AccountNotFoundError: If no account has this (normalized) email
        """
        ...

    async def get_account_by_id(self, account_id: str) -> Account:
        """
        Raises:
            AccountNotFoundError: If the ID does not exist
        """
        ...

    async def update_account(self, account_id: str, patch: AccountPatch) -> None:
        """
        Apply a partial update; only fields set on the patch change.

        Raises:
            AccountNotFoundError: If the ID does not exist
        """
        ...

    async def consume_code_attempt(self, account_id: str) -> int:
        """
        Atomically increment the code attempt counter.

        Returns:
            The counter value before the increment

        Raises:
            AccountNotFoundError: If the ID does not exist
        """
        ...

    async def delete_account(self, account_id: str) -> None:
        """
        Raises:
            AccountNotFoundError: If the ID does not exist
        """
        ...


@runtime_checkable
class IAccountService(Protocol):
    """Account lifecycle: registration, verification, login, reset, deletion."""

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> str:
        """Create an unverified account and return its ID."""
        ...

    async def send_verification_code(self, email: str, force_resend: bool = False) -> CodeDispatch:
        """Issue and email a verification code unless a valid one exists."""
        ...

    async def check_verification_code(self, email: str, code: str) -> VerificationResult:
        """Consume one attempt against the verification code."""
        ...

    async def login(self, email: str, password: str) -> SessionTokens:
        """Exchange email + password for a session."""
        ...

    async def send_password_reset_code(self, email: str, force_resend: bool = False) -> CodeDispatch:
        """Issue and email a password reset code for a verified account."""
        ...

    async def check_password_reset_code(self, email: str, code: str, new_password: str) -> None:
        """Consume one attempt against the reset code and replace the password on match."""
        ...

    def refresh_access_token(self, refresh_token: str) -> str:
        """Mint a new access token from a refresh token."""
        ...

    async def delete_account(self, user_id: str) -> None:
        """Remove dependent records, then the account."""
        ...
