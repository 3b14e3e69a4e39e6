"""
Verification code generation.

Codes are short numeric strings drawn from the OS CSPRNG. They are not
meant to resist guessing on their own; the attempt cap does that.
"""

import secrets
from dataclasses import dataclass

from .policy import CODE_LENGTH


@dataclass(frozen=True)
class VerificationCode:
    """A freshly issued code and its absolute expiry (unix seconds)."""

    code: str
    expires_at: int


def generate_code(now: float, timeout_minutes: int) -> VerificationCode:
    """
    Create a new code valid for `timeout_minutes` from `now`.

    Args:
        now: Current time in unix seconds
        timeout_minutes: Code lifetime

    Returns:
        VerificationCode with a CODE_LENGTH-digit code (no leading zero)
    """
    low = 10 ** (CODE_LENGTH - 1)
    code = str(low + secrets.randbelow(9 * low))
    return VerificationCode(code=code, expires_at=int(now) + timeout_minutes * 60)
