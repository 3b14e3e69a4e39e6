"""
Accounts module.

Handles the account and credential lifecycle: registration, email
verification codes, login, password reset and deletion.

Public API:
- IAccountService: Interface for lifecycle operations
- IAccountRepository: Interface for the credential store
- Account / AccountPatch / NewAccount: Stored record models
- CodeDispatch / VerificationResult: Service results
"""

from .interfaces import IAccountRepository, IAccountService
from .models import (
    Account,
    AccountPatch,
    NewAccount,
    CodeDispatch,
    VerificationResult,
)
from .exceptions import (
    AccountError,
    AccountNotFoundError,
    AccountAlreadyExistsError,
    DuplicateEmailError,
    WeakPasswordError,
    InvalidEmailError,
    InvalidNameError,
    InvalidCredentialsError,
    AccountNotVerifiedError,
    CodeExpiredError,
    AttemptsExhaustedError,
    CodeMismatchError,
    CascadeDeleteError,
)

__all__ = [
    # Interfaces
    "IAccountRepository",
    "IAccountService",
    # Models
    "Account",
    "AccountPatch",
    "NewAccount",
    "CodeDispatch",
    "VerificationResult",
    # Exceptions
    "AccountError",
    "AccountNotFoundError",
    "AccountAlreadyExistsError",
    "DuplicateEmailError",
    "WeakPasswordError",
    "InvalidEmailError",
    "InvalidNameError",
    "InvalidCredentialsError",
    "AccountNotVerifiedError",
    "CodeExpiredError",
    "AttemptsExhaustedError",
    "CodeMismatchError",
    "CascadeDeleteError",
]
