"""Email verification token entity.

A verification token is an opaque random value paired with the instant after
which it can no longer be consumed.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class VerificationToken:
    """Email verification token value object.

    Attributes:
        value: Opaque random token sent to the user.
        expires_at: Timezone-aware instant; the token is valid strictly before it.
    """

    value: str
    expires_at: datetime

    @classmethod
    def generate(
        cls, expires_in: timedelta, now: datetime | None = None
    ) -> "VerificationToken":
        """Generate a new verification token.

        Args:
            expires_in: Token lifetime.
            now: Issuance instant. Defaults to the current UTC time.

        Returns:
            A fresh VerificationToken.
        """
        issued_at = now or datetime.now(timezone.utc)
        return cls(value=str(uuid.uuid4()), expires_at=issued_at + expires_in)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the deadline has been reached."""
        return is_past_deadline(self.expires_at, now)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_past_deadline(expires_at: datetime, now: datetime | None = None) -> bool:
    """Return True once ``now`` is at or after ``expires_at``."""
    current = now or datetime.now(timezone.utc)
    return as_utc(current) >= as_utc(expires_at)
