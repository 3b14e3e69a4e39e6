"""
Mail module interface.

The accounts module depends on IMailer to deliver verification and
password reset codes. Implementations raise EmailDeliveryError when the
message could not be sent.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IMailer(Protocol):
    """Outbound transactional email."""

    async def send_verification_code(self, to_email: str, first_name: str, code: str) -> None:
        """Email a verification code to a newly registered user."""
        ...

    async def send_password_reset_code(self, to_email: str, first_name: str, code: str) -> None:
        """Email a password reset code."""
        ...
