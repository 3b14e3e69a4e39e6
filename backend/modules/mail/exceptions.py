"""
Mail module exceptions.
"""

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised when an outbound email could not be handed to the provider."""

    def __init__(self, mode: str, reason: str = ""):
        super().__init__(
            "Failed to send email",
            service="email",
            code="EMAIL_DELIVERY_FAILED",
            details={"mode": mode, "reason": reason},
        )
