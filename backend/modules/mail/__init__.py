"""
Mail module.

Delivers verification and password reset codes by email.

Public API:
- IMailer: Interface for outbound account email
- EmailService: console / smtp / resend implementation
- EmailDeliveryError: Raised when a message could not be sent
"""

from .interfaces import IMailer
from .service import EmailService, get_email_service, reset_email_service
from .exceptions import EmailDeliveryError

__all__ = [
    "IMailer",
    "EmailService",
    "get_email_service",
    "reset_email_service",
    "EmailDeliveryError",
]
