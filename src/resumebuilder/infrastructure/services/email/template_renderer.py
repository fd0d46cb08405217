"""Jinja2 template renderer for email templates.

Provides safe template rendering with HTML escaping and error handling.
"""

from jinja2 import StrictUndefined, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from resumebuilder.core.logging import get_logger

logger = get_logger(__name__)

VERIFICATION_SUBJECT = "Verify your email"

VERIFICATION_HTML_TEMPLATE = """\
<div style="font-family:sans-serif;">
  <h2>Verify your email</h2>
  <p>Hi {{ name }}, please confirm your email to activate your account.</p>
  <p>
    <a href="{{ verification_url }}"
       style="display:inline-block; padding:10px 16px; background:#6366f1; color:#fff; border-radius:6px; text-decoration:none;">
      Verify Email</a>
  </p>
  <p>Or copy this link: {{ verification_url }}</p>
  <p>This link expires in {{ expires_in_hours }} hours.</p>
</div>
"""

VERIFICATION_TEXT_TEMPLATE = """\
Hi {{ name }},

Please confirm your email to activate your account:
{{ verification_url }}

This link expires in {{ expires_in_hours }} hours.
"""


class TemplateRenderer:
    """Jinja2 template renderer with security features.

    Uses sandboxed environment to prevent code execution in templates.
    """

    def __init__(self, autoescape: bool = True) -> None:
        """Initialize the template renderer with sandboxed environment."""
        self.env = SandboxedEnvironment(
            autoescape=autoescape,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_string: str, variables: dict[str, object]) -> str:
        """Render a template string with variables.

        Args:
            template_string: Jinja2 template string.
            variables: Dictionary of variables to substitute.

        Returns:
            Rendered template string.

        Raises:
            TemplateSyntaxError: If template syntax is invalid.
            UndefinedError: If required variable is missing.
        """
        try:
            template = self.env.from_string(template_string)
            return template.render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise
