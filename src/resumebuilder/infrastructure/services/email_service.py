"""Email service for sending verification emails.

Renders the verification message and hands it to the configured provider.
In development the console provider logs the email instead of sending it.
"""

from urllib.parse import urlencode

from resumebuilder.core.config import Settings, get_settings
from resumebuilder.core.logging import get_logger
from resumebuilder.domain.exceptions import EmailDeliveryError
from resumebuilder.infrastructure.services.email.console_provider import (
    ConsoleEmailProvider,
)
from resumebuilder.infrastructure.services.email.email_provider import EmailProvider
from resumebuilder.infrastructure.services.email.smtp_provider import (
    SMTPProvider,
    SMTPSettings,
)
from resumebuilder.infrastructure.services.email.template_renderer import (
    VERIFICATION_HTML_TEMPLATE,
    VERIFICATION_SUBJECT,
    VERIFICATION_TEXT_TEMPLATE,
    TemplateRenderer,
)

logger = get_logger(__name__)


class EmailService:
    """Service for sending account emails."""

    def __init__(
        self,
        provider: EmailProvider,
        verification_url_base: str,
        from_email: str,
        from_name: str,
        token_lifetime_hours: int = 24,
    ) -> None:
        """Initialize the email service.

        Args:
            provider: Transport used to deliver messages.
            verification_url_base: URL the verification token is appended to.
            from_email: Sender address.
            from_name: Sender display name.
            token_lifetime_hours: Lifetime quoted in the email body.
        """
        self.provider = provider
        self.verification_url_base = verification_url_base
        self.from_email = from_email
        self.from_name = from_name
        self.token_lifetime_hours = token_lifetime_hours
        self._html_renderer = TemplateRenderer()
        self._text_renderer = TemplateRenderer(autoescape=False)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "EmailService":
        """Build the service and its provider from application settings."""
        settings = settings or get_settings()
        provider: EmailProvider
        if settings.email_provider == "smtp":
            provider = SMTPProvider(SMTPSettings.from_settings(settings))
        else:
            provider = ConsoleEmailProvider()
        return cls(
            provider=provider,
            verification_url_base=settings.verification_url_base,
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
            token_lifetime_hours=settings.verification_token_expire_hours,
        )

    def build_verification_url(self, token: str) -> str:
        return f"{self.verification_url_base}?{urlencode({'token': token})}"

    async def send_verification_email(self, to: str, name: str, token: str) -> None:
        """Send the email verification link.

        Args:
            to: Recipient email address.
            name: Recipient display name used in the greeting.
            token: Raw verification token.

        Raises:
            EmailDeliveryError: If rendering or delivery fails.
        """
        variables = {
            "name": name,
            "verification_url": self.build_verification_url(token),
            "expires_in_hours": self.token_lifetime_hours,
        }

        try:
            html_body = self._html_renderer.render(VERIFICATION_HTML_TEMPLATE, variables)
            text_body = self._text_renderer.render(VERIFICATION_TEXT_TEMPLATE, variables)
            sent = await self.provider.send_email(
                to=to,
                subject=VERIFICATION_SUBJECT,
                html_body=html_body,
                text_body=text_body,
                from_email=self.from_email,
                from_name=self.from_name,
            )
        except Exception as e:
            logger.error("Failed to send verification email", email=to, error=str(e))
            raise EmailDeliveryError(f"Failed to send verification email: {e}") from e

        if not sent:
            logger.error("Email provider refused verification email", email=to)
            raise EmailDeliveryError()

        logger.info("Verification email sent", email=to)


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the process-wide email service built from settings."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService.from_settings()
    return _email_service
