"""
Account input and code policy.

Format rules for registration input and the constants that govern the
verification code state machine.

Example:
    from modules.accounts.policy import validate_password

    errors = validate_password("weakpass")
    if errors:
        print("Password errors:", errors)
"""

import re

# Verification codes
CODE_LENGTH = 6
DEFAULT_CODE_TIMEOUT_MINUTES = 10
DEFAULT_MAX_CODE_ATTEMPTS = 5

# Field limits
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 50
EMAIL_COLUMN_LENGTH = 60
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 50
PASSWORD_SPECIAL_CHARS = "!@#$%^&*"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def parked_attempts(max_attempts: int) -> int:
    """
    Attempt counter value meaning "no active code".

    An account whose counter sits at the maximum cannot guess, whether the
    code was consumed, exhausted or never issued. Registration and every
    successful check park the counter here; only a newly issued code moves
    it back to zero.
    """
    return max_attempts


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively."""
    return email.strip().lower()


def normalize_name(name: str) -> str:
    """Capitalize the first letter and lowercase the remainder."""
    name = name.strip()
    return name[:1].upper() + name[1:].lower()


def is_valid_email(email: str) -> bool:
    return 1 <= len(email) <= EMAIL_MAX_LENGTH and bool(EMAIL_PATTERN.match(email))


def is_valid_name(name: str) -> bool:
    return 1 <= len(name) <= NAME_MAX_LENGTH and name.isprintable()


def validate_password(password: str) -> list[str]:
    """
    Check password strength.

    Returns:
        List of unmet requirements; empty when the password is acceptable.
    """
    errors: list[str] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    if len(password) > PASSWORD_MAX_LENGTH:
        errors.append(f"Password must be no more than {PASSWORD_MAX_LENGTH} characters")

    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    if not re.search(f"[{re.escape(PASSWORD_SPECIAL_CHARS)}]", password):
        errors.append(
            f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})"
        )

    return errors
