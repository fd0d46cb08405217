"""Service for email verification token logic.

Issues verification tokens and decides whether a presented token may be
consumed for a given user. Persisting the outcome is left to the caller.
"""

import hmac
from datetime import datetime, timedelta

from resumebuilder.core.logging import get_logger
from resumebuilder.domain.entities.verification_token import (
    VerificationToken,
    is_past_deadline,
)
from resumebuilder.domain.exceptions import (
    TokenMismatchError,
    VerificationTokenExpiredError,
)
from resumebuilder.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


class EmailVerificationService:
    """Issues and validates single-use email verification tokens."""

    def __init__(self, token_lifetime: timedelta = DEFAULT_TOKEN_LIFETIME) -> None:
        """Initialize the verification service.

        Args:
            token_lifetime: How long an issued token stays valid.
        """
        self.token_lifetime = token_lifetime

    def issue(self, now: datetime | None = None) -> VerificationToken:
        """Generate a new verification token with its expiry."""
        return VerificationToken.generate(self.token_lifetime, now=now)

    def consume(self, user: UserModel, token: str, now: datetime | None = None) -> None:
        """Check that ``token`` can be consumed for ``user``.

        On success the caller must clear the token fields and mark the user
        verified.

        Args:
            user: The user currently holding the token.
            token: The raw token presented by the client.
            now: Comparison instant. Defaults to the current UTC time.

        Raises:
            TokenMismatchError: If the stored token is missing or differs.
            VerificationTokenExpiredError: If the deadline has passed.
        """
        stored = user.verification_token
        if stored is None or not hmac.compare_digest(stored.encode(), token.encode()):
            logger.info("Email verification failed: token mismatch", user_id=user.id)
            raise TokenMismatchError()

        if user.verification_expires is None or is_past_deadline(
            user.verification_expires, now
        ):
            logger.info("Email verification failed: token expired", user_id=user.id)
            raise VerificationTokenExpiredError()

    @staticmethod
    def apply(user: UserModel, token: VerificationToken) -> None:
        """Store a freshly issued token on an unverified user."""
        user.verification_token = token.value
        user.verification_expires = token.expires_at
