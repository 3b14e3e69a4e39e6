"""
Accounts module exceptions.

Each error carries a stable machine-readable code; the API layer maps the
base class to an HTTP status.
"""

from shared.exceptions import (
    ShipmatesError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ExternalServiceError,
)


class AccountError(ShipmatesError):
    """Base exception for account-related errors."""

    pass


# -----------------------------------------------------------------------------
# Store-level existence
# -----------------------------------------------------------------------------

class AccountNotFoundError(NotFoundError):
    """Raised when no account matches an email or ID."""

    def __init__(self, message: str = "Email not associated with an account"):
        super().__init__(message, code="ACCOUNT_NOT_FOUND")


class AccountAlreadyExistsError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self):
        super().__init__(
            "Account already exists with that email. Please try logging in.",
            code="ACCOUNT_ALREADY_EXISTS",
        )


class DuplicateEmailError(AccountAlreadyExistsError):
    """Raised by the store when an insert violates email uniqueness."""

    pass


# -----------------------------------------------------------------------------
# Input validation
# -----------------------------------------------------------------------------

class WeakPasswordError(ValidationError):
    """Raised when a password does not meet the strength policy."""

    def __init__(self, problems: list[str]):
        super().__init__(
            "Password does not meet requirements",
            code="WEAK_PASSWORD",
            details={"problems": problems},
        )


class InvalidEmailError(ValidationError):
    """Raised when an email fails format checks."""

    def __init__(self):
        super().__init__("Email does not meet requirements", code="INVALID_EMAIL")


class InvalidNameError(ValidationError):
    """Raised when a first or last name fails format checks."""

    def __init__(self):
        super().__init__("Names do not meet requirements", code="INVALID_NAME")


# -----------------------------------------------------------------------------
# Security policy
# -----------------------------------------------------------------------------

class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown email or a wrong password; the two are indistinguishable."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class AccountNotVerifiedError(AuthenticationError):
    """Raised when an operation requires a verified email."""

    def __init__(self):
        super().__init__("Email not verified", code="ACCOUNT_NOT_VERIFIED")


class CodeExpiredError(AuthenticationError):
    """Raised when the active code's expiry has passed."""

    def __init__(self):
        super().__init__("Email code timed out", code="EMAIL_CODE_TIMEOUT")


class AttemptsExhaustedError(AuthenticationError):
    """Raised when no guesses remain against the current code."""

    def __init__(self, max_attempts: int):
        super().__init__(
            f"Email code rejected, all {max_attempts} attempts used",
            code="EMAIL_CODE_MAX_ATTEMPTS",
            details={"max_attempts": max_attempts},
        )


class CodeMismatchError(AuthenticationError):
    """Raised when a submitted code is wrong (the attempt is still consumed)."""

    def __init__(self, attempts_remaining: int):
        super().__init__(
            "Incorrect email code. Please try again.",
            code="EMAIL_CODE_INCORRECT",
            details={"attempts_remaining": attempts_remaining},
        )


# -----------------------------------------------------------------------------
# Infrastructure
# -----------------------------------------------------------------------------

class CascadeDeleteError(ExternalServiceError):
    """Raised when dependent records could not be removed; the account is kept."""

    def __init__(self, user_id: str, reason: str = ""):
        super().__init__(
            "Failed to delete user",
            service="store",
            code="CASCADE_DELETE_FAILED",
            details={"user_id": user_id, "reason": reason},
        )
