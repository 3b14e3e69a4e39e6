import logging

import aiosmtplib
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from modules.mail.exceptions import EmailDeliveryError
from modules.mail.interfaces import IMailer
from modules.mail.service import RESEND_API_URL, EmailService, get_email_service


class TestEmailServiceModes:
    def test_console_mode(self, settings_factory):
        assert EmailService(settings_factory(email_mode="console")).mode == "console"

    def test_resend_without_key_falls_back_to_console(self, settings_factory):
        service = EmailService(settings_factory(email_mode="resend", resend_api_key=""))
        assert service.mode == "console"

    def test_smtp_without_host_falls_back_to_console(self, settings_factory):
        service = EmailService(settings_factory(email_mode="smtp", smtp_host=""))
        assert service.mode == "console"

    def test_unknown_mode_rejected(self, settings_factory):
        with pytest.raises(ValueError, match="Unknown email mode"):
            EmailService(settings_factory(email_mode="pigeon"))

    def test_implements_interface(self, test_settings):
        assert isinstance(EmailService(test_settings), IMailer)

    def test_singleton(self, monkeypatch):
        monkeypatch.setenv("EMAIL_MODE", "console")
        assert get_email_service() is get_email_service()


class TestConsoleDelivery:
    @pytest.mark.asyncio
    async def test_code_is_logged(self, test_settings, caplog):
        service = EmailService(test_settings)

        with caplog.at_level(logging.INFO, logger="modules.mail.service"):
            await service.send_verification_code("ann@x.com", "Ann", "123456")

        assert "ann@x.com" in caplog.text
        assert "123456" in caplog.text


class TestSmtpDelivery:
    @pytest.fixture
    def service(self, settings_factory):
        return EmailService(
            settings_factory(email_mode="smtp", smtp_host="smtp.example.com", smtp_port=587, smtp_user="u", smtp_password="p")
        )

    @pytest.mark.asyncio
    async def test_sends_multipart_message(self, service):
        with patch("modules.mail.service.aiosmtplib.send", new_callable=AsyncMock) as mock_send:
            await service.send_password_reset_code("ann@x.com", "Ann", "654321")

        message = mock_send.call_args[0][0]
        kwargs = mock_send.call_args[1]
        assert message["To"] == "ann@x.com"
        assert "password" in message["Subject"].lower()
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["start_tls"] is True
        assert kwargs["use_tls"] is False

    @pytest.mark.asyncio
    async def test_smtp_failure_raises_delivery_error(self, service):
        with patch(
            "modules.mail.service.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=aiosmtplib.SMTPConnectError("refused"),
        ):
            with pytest.raises(EmailDeliveryError) as exc_info:
                await service.send_verification_code("ann@x.com", "Ann", "123456")

        assert exc_info.value.details["mode"] == "smtp"


class TestResendDelivery:
    @pytest.fixture
    def service(self, settings_factory):
        return EmailService(settings_factory(email_mode="resend", resend_api_key="re_test"))

    def _client(self, response=None, error=None):
        client = MagicMock()
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        client.post = AsyncMock(return_value=response, side_effect=error)
        return client

    @pytest.mark.asyncio
    async def test_posts_to_resend(self, service):
        response = httpx.Response(200, json={"id": "email-1"})
        client = self._client(response)

        with patch("modules.mail.service.httpx.AsyncClient", return_value=client):
            await service.send_verification_code("ann@x.com", "Ann", "123456")

        url = client.post.call_args[0][0]
        payload = client.post.call_args[1]["json"]
        assert url == RESEND_API_URL
        assert payload["to"] == ["ann@x.com"]
        assert "123456" in payload["text"]
        assert client.post.call_args[1]["headers"]["Authorization"] == "Bearer re_test"

    @pytest.mark.asyncio
    async def test_api_error_raises_delivery_error(self, service):
        client = self._client(httpx.Response(422, json={"message": "Invalid `to` field"}))

        with patch("modules.mail.service.httpx.AsyncClient", return_value=client):
            with pytest.raises(EmailDeliveryError) as exc_info:
                await service.send_verification_code("ann@x.com", "Ann", "123456")

        assert exc_info.value.details["reason"] == "Invalid `to` field"

    @pytest.mark.asyncio
    async def test_transport_error_raises_delivery_error(self, service):
        client = self._client(error=httpx.ConnectError("down"))

        with patch("modules.mail.service.httpx.AsyncClient", return_value=client):
            with pytest.raises(EmailDeliveryError):
                await service.send_password_reset_code("ann@x.com", "Ann", "123456")

    @pytest.mark.asyncio
    async def test_name_markup_is_escaped_in_html(self, service):
        client = self._client(httpx.Response(200, json={"id": "email-1"}))
        name = '<a href="https://evil.example">Click</a>'

        with patch("modules.mail.service.httpx.AsyncClient", return_value=client):
            await service.send_verification_code("ann@x.com", name, "123456")

        body = client.post.call_args[1]["json"]["html"]
        assert "<a href" not in body
        assert "&lt;a href=&quot;https://evil.example&quot;&gt;Click&lt;/a&gt;" in body
        assert "123456" in body
