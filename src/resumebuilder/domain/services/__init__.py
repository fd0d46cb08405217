"""Domain services for ResumeBuilder.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from resumebuilder.domain.services.auth_service import AuthService
from resumebuilder.domain.services.email_verification_service import (
    DEFAULT_TOKEN_LIFETIME,
    EmailVerificationService,
)

__all__ = [
    "AuthService",
    "DEFAULT_TOKEN_LIFETIME",
    "EmailVerificationService",
]
