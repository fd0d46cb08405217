"""Unit tests for EmailService and the email providers."""

from unittest.mock import AsyncMock, patch

import pytest

from resumebuilder.core.config import Settings
from resumebuilder.domain.exceptions import EmailDeliveryError
from resumebuilder.infrastructure.services.email import (
    ConsoleEmailProvider,
    EmailProvider,
    SMTPProvider,
    SMTPSettings,
    TemplateRenderer,
)
from resumebuilder.infrastructure.services.email_service import EmailService

VERIFY_BASE = "http://localhost:8080/api/auth/verify-email"


@pytest.fixture
def provider() -> AsyncMock:
    provider = AsyncMock(spec=EmailProvider)
    provider.send_email.return_value = True
    return provider


@pytest.fixture
def email_service(provider) -> EmailService:
    return EmailService(
        provider=provider,
        verification_url_base=VERIFY_BASE,
        from_email="no-reply@resumebuilder.app",
        from_name="ResumeBuilder",
    )


class TestSendVerificationEmail:
    """Tests for send_verification_email."""

    @pytest.mark.asyncio
    async def test_sends_link_with_token(self, email_service, provider):
        await email_service.send_verification_email(
            to="alice@example.com", name="Alice", token="tok-123"
        )

        provider.send_email.assert_awaited_once()
        kwargs = provider.send_email.await_args.kwargs
        assert kwargs["to"] == "alice@example.com"
        assert kwargs["subject"] == "Verify your email"
        assert kwargs["from_email"] == "no-reply@resumebuilder.app"
        assert f"{VERIFY_BASE}?token=tok-123" in kwargs["html_body"]
        assert f"{VERIFY_BASE}?token=tok-123" in kwargs["text_body"]
        assert "Hi Alice" in kwargs["text_body"]
        assert "24 hours" in kwargs["text_body"]

    @pytest.mark.asyncio
    async def test_name_is_escaped_in_html(self, email_service, provider):
        await email_service.send_verification_email(
            to="alice@example.com", name="<b>Al</b>", token="tok"
        )

        kwargs = provider.send_email.await_args.kwargs
        assert "&lt;b&gt;Al&lt;/b&gt;" in kwargs["html_body"]
        assert "<b>Al</b>" in kwargs["text_body"]

    @pytest.mark.asyncio
    async def test_provider_error_becomes_delivery_error(self, email_service, provider):
        provider.send_email.side_effect = ConnectionRefusedError("smtp down")

        with pytest.raises(EmailDeliveryError) as exc_info:
            await email_service.send_verification_email(
                to="alice@example.com", name="Alice", token="tok"
            )

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_provider_refusal_becomes_delivery_error(self, email_service, provider):
        provider.send_email.return_value = False

        with pytest.raises(EmailDeliveryError):
            await email_service.send_verification_email(
                to="alice@example.com", name="Alice", token="tok"
            )

    def test_token_is_url_encoded(self, email_service):
        assert email_service.build_verification_url("a b&c") == f"{VERIFY_BASE}?token=a+b%26c"


class TestFromSettings:
    """Tests for provider selection."""

    def test_console_by_default(self):
        service = EmailService.from_settings(Settings())

        assert isinstance(service.provider, ConsoleEmailProvider)
        assert service.verification_url_base == VERIFY_BASE

    def test_smtp_when_configured(self):
        settings = Settings(email_provider="smtp", smtp_host="smtp.example.com", smtp_port=2525)
        service = EmailService.from_settings(settings)

        assert isinstance(service.provider, SMTPProvider)
        assert service.provider.settings.host == "smtp.example.com"
        assert service.provider.settings.port == 2525


class TestProviders:
    """Tests for the concrete providers."""

    @pytest.mark.asyncio
    async def test_console_provider_always_succeeds(self):
        sent = await ConsoleEmailProvider().send_email(
            to="alice@example.com",
            subject="Verify your email",
            html_body="<p>hi</p>",
            text_body="hi",
            from_email="no-reply@resumebuilder.app",
            from_name="ResumeBuilder",
        )

        assert sent is True

    @pytest.mark.asyncio
    async def test_smtp_provider_sends_message(self):
        provider = SMTPProvider(
            SMTPSettings(host="smtp.example.com", port=587, username="u", password="p")
        )

        with patch("resumebuilder.infrastructure.services.email.smtp_provider.aiosmtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__aenter__.return_value
            smtp.login = AsyncMock()
            smtp.send_message = AsyncMock()

            sent = await provider.send_email(
                to="alice@example.com",
                subject="Verify your email",
                html_body="<p>hi</p>",
                text_body="hi",
                from_email="no-reply@resumebuilder.app",
                from_name="ResumeBuilder",
            )

        assert sent is True
        assert smtp_cls.call_args.kwargs["start_tls"] is True
        assert smtp_cls.call_args.kwargs["use_tls"] is False
        smtp.login.assert_awaited_once_with("u", "p")
        message = smtp.send_message.await_args.args[0]
        assert message["To"] == "alice@example.com"
        assert message["From"] == "ResumeBuilder <no-reply@resumebuilder.app>"


class TestTemplateRenderer:
    """Tests for TemplateRenderer."""

    def test_missing_variable_raises(self):
        from jinja2 import UndefinedError

        with pytest.raises(UndefinedError):
            TemplateRenderer().render("Hi {{ name }}", {})

    def test_sandbox_blocks_attribute_escape(self):
        from jinja2.exceptions import SecurityError

        with pytest.raises(SecurityError):
            TemplateRenderer().render("{{ name.__class__ }}", {"name": "x"})
