"""
Account lifecycle service implementation.

Registration, email verification, login, password reset and deletion.
All persistent state goes through an IAccountRepository; codes go out
through an IMailer; sessions come from the token service.

The verification and password reset flows share the three code fields on
the account and the same check sequence:

    not found -> flow gate -> expired -> attempts exhausted
              -> consume attempt -> mismatch -> commit
"""

import asyncio
import hmac
import logging
import time
from enum import Enum
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.exceptions import ShipmatesError
from modules.auth.interfaces import ITokenService
from modules.auth.models import SessionTokens
from modules.cruises.interfaces import IJoinedCruiseRepository
from modules.mail.exceptions import EmailDeliveryError
from modules.mail.interfaces import IMailer

from .codes import generate_code
from .hashing import PasswordHasher
from .interfaces import IAccountRepository
from .models import Account, AccountPatch, CodeDispatch, NewAccount, VerificationResult
from .policy import (
    is_valid_email,
    is_valid_name,
    normalize_email,
    normalize_name,
    parked_attempts,
    validate_password,
)
from .exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountNotVerifiedError,
    AttemptsExhaustedError,
    CascadeDeleteError,
    CodeExpiredError,
    CodeMismatchError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidNameError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)


class CodePurpose(str, Enum):
    """Which flow a code belongs to."""

    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"


class AccountService:
    """
    Implementation of the account lifecycle.

    The service keeps no per-account state of its own; every decision is
    made from the record the repository returns, and the attempt counter is
    advanced with the repository's atomic consume operation.
    """

    def __init__(
        self,
        repository: IAccountRepository,
        tokens: ITokenService,
        mailer: IMailer,
        cruises: IJoinedCruiseRepository,
        hasher: Optional[PasswordHasher] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the account service.

        Args:
            repository: Credential store adapter
            tokens: Session token issuer
            mailer: Outbound email for codes
            cruises: Dependent records removed on account deletion
            hasher: Password hasher. Defaults to bcrypt with the configured rounds.
            settings: Settings override (for testing)
            clock: Current time in unix seconds
        """
        settings = settings or get_settings()

        self._repository = repository
        self._tokens = tokens
        self._mailer = mailer
        self._cruises = cruises
        self._hasher = hasher or PasswordHasher(rounds=settings.bcrypt_rounds)
        self._clock = clock

        self._timeout_minutes = settings.email_code_timeout_minutes
        self._max_attempts = settings.max_email_code_attempts

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> str:
        """
        Create an unverified account.

        The new account has no active code; the client asks for one with
        send_verification_code.

        Returns:
            The new account ID

        Raises:
            AccountAlreadyExistsError: If the email is taken
            InvalidEmailError / InvalidNameError / WeakPasswordError: On format checks
        """
        email = normalize_email(email)

        if await self._email_exists(email):
            raise AccountAlreadyExistsError()

        if not is_valid_email(email):
            raise InvalidEmailError()

        first_name = first_name.strip()
        last_name = last_name.strip()
        if not is_valid_name(first_name) or not is_valid_name(last_name):
            raise InvalidNameError()

        problems = validate_password(password)
        if problems:
            raise WeakPasswordError(problems)

        account_id = await self._repository.create_account(
            NewAccount(
                first_name=normalize_name(first_name),
                last_name=normalize_name(last_name),
                email=email,
                password_hash=await asyncio.to_thread(self._hasher.hash, password),
                email_code_attempts=parked_attempts(self._max_attempts),
            )
        )

        logger.info(f"Registered account {account_id}")
        return account_id

    async def _email_exists(self, email: str) -> bool:
        try:
            await self._repository.get_account_by_email(email)
        except AccountNotFoundError:
            return False
        return True

    # -------------------------------------------------------------------------
    # Email verification
    # -------------------------------------------------------------------------

    async def send_verification_code(self, email: str, force_resend: bool = False) -> CodeDispatch:
        """
        Issue and email a verification code.

        A still-usable code is left alone unless `force_resend` is set, so a
        page reload does not invalidate the code already in the inbox.

        Raises:
            AccountNotFoundError: If no account has this email
            EmailDeliveryError: If the email could not be sent (the code stays stored)
        """
        account = await self._repository.get_account_by_email(normalize_email(email))

        if account.email_verified:
            return CodeDispatch.ALREADY_VERIFIED

        return await self._issue_code(account, CodePurpose.VERIFICATION, force_resend)

    async def check_verification_code(self, email: str, code: str) -> VerificationResult:
        """
        Check a verification code and, on match, verify the email.

        One attempt is consumed before the comparison, including on the
        call that succeeds. An already verified account gets a no-op result
        without tokens.

        Raises:
            AccountNotFoundError, AttemptsExhaustedError, CodeExpiredError, CodeMismatchError
        """
        account = await self._repository.get_account_by_email(normalize_email(email))

        if account.email_verified:
            return VerificationResult(already_verified=True)

        await self._consume_code(account, code, CodePurpose.VERIFICATION)

        await self._repository.update_account(
            account.id,
            AccountPatch(email_verified=True, **self._parked_code_fields()),
        )

        logger.info(f"Email verified for account {account.id}")
        return VerificationResult(tokens=self._tokens.issue_session(account.id))

    # -------------------------------------------------------------------------
    # Login / sessions
    # -------------------------------------------------------------------------

    async def login(self, email: str, password: str) -> SessionTokens:
        """
        Exchange email + password for a session.

        An unknown email and a wrong password raise the same error.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountNotVerifiedError: If the email is not verified yet
        """
        try:
            account = await self._repository.get_account_by_email(normalize_email(email))
        except AccountNotFoundError:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError() from None

        if not account.email_verified:
            raise AccountNotVerifiedError()

        if not await asyncio.to_thread(self._hasher.verify, password, account.password_hash):
            logger.warning(f"Login failed: wrong password for account {account.id}")
            raise InvalidCredentialsError()

        return self._tokens.issue_session(account.id)

    def refresh_access_token(self, refresh_token: str) -> str:
        """
        Mint a new access token. The refresh token itself is not extended.

        Raises:
            MissingTokenError / InvalidTokenError / ExpiredTokenError
        """
        return self._tokens.refresh(refresh_token)

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def send_password_reset_code(self, email: str, force_resend: bool = False) -> CodeDispatch:
        """
        Issue and email a password reset code.

        Raises:
            AccountNotFoundError: If no account has this email
            AccountNotVerifiedError: Unverified accounts must verify first
            EmailDeliveryError: If the email could not be sent (the code stays stored)
        """
        account = await self._repository.get_account_by_email(normalize_email(email))

        if not account.email_verified:
            raise AccountNotVerifiedError()

        return await self._issue_code(account, CodePurpose.PASSWORD_RESET, force_resend)

    async def check_password_reset_code(self, email: str, code: str, new_password: str) -> None:
        """
        Check a reset code and, on match, replace the password.

        A weak new password is rejected after the code matched; the attempt
        is spent but the code stays active so the client can retry.

        Raises:
            AccountNotFoundError, AccountNotVerifiedError, AttemptsExhaustedError,
            CodeExpiredError, CodeMismatchError, WeakPasswordError
        """
        account = await self._repository.get_account_by_email(normalize_email(email))

        if not account.email_verified:
            raise AccountNotVerifiedError()

        await self._consume_code(account, code, CodePurpose.PASSWORD_RESET)

        problems = validate_password(new_password)
        if problems:
            raise WeakPasswordError(problems)

        await self._repository.update_account(
            account.id,
            AccountPatch(
                password_hash=await asyncio.to_thread(self._hasher.hash, new_password),
                **self._parked_code_fields(),
            ),
        )

        logger.info(f"Password reset for account {account.id}")

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    async def delete_account(self, user_id: str) -> None:
        """
        Remove the user's joined cruises, then the account.

        Raises:
            CascadeDeleteError: If dependent records could not be removed
                (the account is left in place)
            AccountNotFoundError: If the account does not exist
        """
        try:
            removed = await self._cruises.delete_joined_cruises_by_user(user_id)
        except ShipmatesError as e:
            logger.error(f"Cascade delete failed for account {user_id}: {e.message}")
            raise CascadeDeleteError(user_id, e.message) from e

        await self._repository.delete_account(user_id)
        logger.info(f"Deleted account {user_id} and {removed} joined cruise(s)")

    # -------------------------------------------------------------------------
    # Code state machine
    # -------------------------------------------------------------------------

    def _has_usable_code(self, account: Account, now: float) -> bool:
        return (
            bool(account.email_code)
            and now <= account.email_code_expires_at
            and account.email_code_attempts < self._max_attempts
        )

    def _parked_code_fields(self) -> dict:
        return {
            "email_code": "",
            "email_code_expires_at": 0,
            "email_code_attempts": parked_attempts(self._max_attempts),
        }

    async def _issue_code(self, account: Account, purpose: CodePurpose, force_resend: bool) -> CodeDispatch:
        now = self._clock()

        if not force_resend and self._has_usable_code(account, now):
            return CodeDispatch.EXISTING_CODE_VALID

        issued = generate_code(now, self._timeout_minutes)
        await self._repository.update_account(
            account.id,
            AccountPatch(
                email_code=issued.code,
                email_code_expires_at=issued.expires_at,
                email_code_attempts=0,
            ),
        )
        logger.info(f"Issued {purpose.value} code for account {account.id}")

        try:
            if purpose is CodePurpose.VERIFICATION:
                await self._mailer.send_verification_code(account.email, account.first_name, issued.code)
            else:
                await self._mailer.send_password_reset_code(account.email, account.first_name, issued.code)
        except EmailDeliveryError:
            logger.warning(f"{purpose.value} code stored but not delivered for account {account.id}")
            raise

        return CodeDispatch.SENT

    async def _consume_code(self, account: Account, code: str, purpose: CodePurpose) -> None:
        """
        Spend one attempt against the active code.

        Returns normally only when the submitted code matches.
        """
        # A parked code has expiry 0, so a consumed code reads as expired.
        if not account.email_code or self._clock() > account.email_code_expires_at:
            raise CodeExpiredError()

        if account.email_code_attempts >= self._max_attempts:
            raise AttemptsExhaustedError(self._max_attempts)

        # The counter before our increment decides; a concurrent check may
        # have spent the last attempt after we read the account.
        previous = await self._repository.consume_code_attempt(account.id)
        if previous >= self._max_attempts:
            raise AttemptsExhaustedError(self._max_attempts)

        if not hmac.compare_digest(code.strip().encode("utf-8"), account.email_code.encode("utf-8")):
            remaining = self._max_attempts - previous - 1
            if remaining == 0:
                logger.warning(f"All {purpose.value} code attempts used for account {account.id}")
            raise CodeMismatchError(remaining)

