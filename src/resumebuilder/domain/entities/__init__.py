"""Domain entities for ResumeBuilder.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from resumebuilder.domain.entities.verification_token import (
    VerificationToken,
    as_utc,
    is_past_deadline,
)

__all__ = [
    "VerificationToken",
    "as_utc",
    "is_past_deadline",
]
