"""
Email service for sending account codes.

Supports console logging (development), SMTP and the Resend HTTP API.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

import aiosmtplib
import httpx

from shared.config import Settings, get_settings
from .exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT_SECONDS = 10.0

EMAIL_MODES = ("console", "smtp", "resend")


class EmailService:
    """
    Email service with multi-mode support.

    Modes:
        - console: Log emails (development, the code is visible in the log)
        - smtp: Send via an SMTP server
        - resend: Send via the Resend HTTP API
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()

        self._mode = settings.email_mode
        self._from_email = settings.email_from_address
        self._from_name = settings.email_from_name
        self._timeout_minutes = settings.email_code_timeout_minutes
        self._resend_api_key = settings.resend_api_key
        self._smtp_host = settings.smtp_host
        self._smtp_port = settings.smtp_port
        self._smtp_user = settings.smtp_user
        self._smtp_password = settings.smtp_password

        if self._mode not in EMAIL_MODES:
            raise ValueError(f"Unknown email mode: {self._mode}")

        if self._mode == "resend" and not self._resend_api_key:
            logger.warning("Resend API key not configured, falling back to console mode")
            self._mode = "console"
        elif self._mode == "smtp" and not self._smtp_host:
            logger.warning("SMTP host not configured, falling back to console mode")
            self._mode = "console"

        logger.info(f"Email service initialized in {self._mode} mode")

    @property
    def mode(self) -> str:
        return self._mode

    async def send_verification_code(self, to_email: str, first_name: str, code: str) -> None:
        subject = "Verify your Shipmates email"
        text = (
            f"Hi {first_name},\n\n"
            f"Your Shipmates verification code is {code}.\n"
            f"It expires in {self._timeout_minutes} minutes.\n\n"
            "If you did not create an account, you can ignore this email."
        )
        await self._send(to_email, subject, _render_html(subject, first_name, code, self._timeout_minutes), text)

    async def send_password_reset_code(self, to_email: str, first_name: str, code: str) -> None:
        subject = "Reset your Shipmates password"
        text = (
            f"Hi {first_name},\n\n"
            f"Your Shipmates password reset code is {code}.\n"
            f"It expires in {self._timeout_minutes} minutes.\n\n"
            "If you did not ask to reset your password, you can ignore this email."
        )
        await self._send(to_email, subject, _render_html(subject, first_name, code, self._timeout_minutes), text)

    # -------------------------------------------------------------------------
    # Transports
    # -------------------------------------------------------------------------

    async def _send(self, to: str, subject: str, html: str, text: str) -> None:
        """Send email via the configured provider."""
        if self._mode == "console":
            self._send_console(to, subject, text)
        elif self._mode == "smtp":
            await self._send_smtp(to, subject, html, text)
        else:
            await self._send_resend(to, subject, html, text)

    def _send_console(self, to: str, subject: str, text: str) -> None:
        """Log email to console (development mode)."""
        logger.info("=" * 60)
        logger.info("EMAIL (console mode)")
        logger.info(f"To: {to}")
        logger.info(f"Subject: {subject}")
        logger.info("-" * 60)
        logger.info(text)
        logger.info("=" * 60)

    async def _send_smtp(self, to: str, subject: str, html: str, text: str) -> None:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f"{self._from_name} <{self._from_email}>"
        message["To"] = to
        message.attach(MIMEText(text, "plain"))
        message.attach(MIMEText(html, "html"))

        # Implicit TLS on 465, STARTTLS otherwise
        use_tls = self._smtp_port == 465

        try:
            await aiosmtplib.send(
                message,
                hostname=self._smtp_host,
                port=self._smtp_port,
                username=self._smtp_user or None,
                password=self._smtp_password or None,
                use_tls=use_tls,
                start_tls=not use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email via SMTP: {e}")
            raise EmailDeliveryError("smtp", str(e)) from e

        logger.info(f"Email sent via SMTP to {to}")

    async def _send_resend(self, to: str, subject: str, html: str, text: str) -> None:
        async with httpx.AsyncClient(timeout=RESEND_TIMEOUT_SECONDS) as client:
            try:
                response = await client.post(
                    RESEND_API_URL,
                    headers={"Authorization": f"Bearer {self._resend_api_key}"},
                    json={
                        "from": f"{self._from_name} <{self._from_email}>",
                        "to": [to],
                        "subject": subject,
                        "html": html,
                        "text": text,
                    },
                )
            except httpx.HTTPError as e:
                logger.error(f"Failed to send email via Resend: {e}")
                raise EmailDeliveryError("resend", str(e)) from e

        if response.status_code != 200:
            try:
                error_msg = response.json().get("message", "Unknown error")
            except ValueError:
                error_msg = response.text or "Unknown error"
            logger.error(f"Resend API error ({response.status_code}): {error_msg}")
            raise EmailDeliveryError("resend", error_msg)

        logger.info(f"Email sent via Resend to {to} (id={response.json().get('id')})")


def _render_html(title: str, first_name: str, code: str, timeout_minutes: int) -> str:
    # Names are user-supplied; they must not inject markup into the email.
    title = escape(title)
    first_name = escape(first_name)
    return f"""<!DOCTYPE html>
<html>
<body style="margin: 0; padding: 24px; font-family: Arial, Helvetica, sans-serif; color: #333333;">
    <h1 style="font-size: 22px; color: #1F3A5F;">{title}</h1>
    <p>Hi {first_name},</p>
    <p>Your code is:</p>
    <p style="font-size: 32px; font-weight: bold; letter-spacing: 6px;">{code}</p>
    <p>It expires in {timeout_minutes} minutes.</p>
</body>
</html>
"""


# Singleton instance
_service_instance: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = EmailService()
    return _service_instance


def reset_email_service() -> None:
    """Reset the email service singleton (for testing)."""
    global _service_instance
    _service_instance = None
