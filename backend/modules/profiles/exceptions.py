"""
Profiles module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import ValidationError


class InvalidBirthDateError(ValidationError):
    """Raised when a birth date is malformed, in the future or too far back."""

    def __init__(self, message: str = "Birth date does not meet requirements"):
        super().__init__(message, code="INVALID_BIRTH_DATE")


class InvalidProfileError(ValidationError):
    """Raised when a profile update has no fields or a field is out of bounds."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="INVALID_PROFILE", details=details)
