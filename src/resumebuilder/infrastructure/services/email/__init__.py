"""Email providers and template rendering."""

from resumebuilder.infrastructure.services.email.console_provider import (
    ConsoleEmailProvider,
)
from resumebuilder.infrastructure.services.email.email_provider import EmailProvider
from resumebuilder.infrastructure.services.email.smtp_provider import (
    SMTPProvider,
    SMTPSettings,
)
from resumebuilder.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
)

__all__ = [
    "ConsoleEmailProvider",
    "EmailProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
]
