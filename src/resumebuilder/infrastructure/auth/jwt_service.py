"""JWT token service.

Issues signed, time-limited access tokens and validates them. Signature
validity and expiry are checked separately: ``is_valid`` ignores expiry and
``is_expired`` treats anything it cannot read as expired, so a caller must
check both before trusting a token.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from resumebuilder.core.config import Settings, get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is malformed or its signature does not verify."""

    pass


class JWTService:
    """Service for creating and validating JWT access tokens."""

    ALGORITHM = "HS256"

    def __init__(self, secret_key: str, expires_delta: timedelta) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Symmetric key used to sign and verify tokens.
            expires_delta: Lifetime of issued tokens.
        """
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "JWTService":
        """Build a service from application settings."""
        settings = settings or get_settings()
        return cls(
            secret_key=settings.secret_key,
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def create_access_token(self, user_id: str, now: datetime | None = None) -> str:
        """Create an access token for a user.

        Args:
            user_id: The user's unique identifier, stored as ``sub``.
            now: Issuance instant. Defaults to the current UTC time.

        Returns:
            Encoded JWT access token.
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def _decode_ignoring_expiry(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except (jwt.InvalidTokenError, TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token") from e

    def parse_subject(self, token: str) -> str:
        """Extract the user ID from a token.

        The signature is verified but expiry is not considered.

        Args:
            token: The encoded JWT token.

        Returns:
            The ``sub`` claim.

        Raises:
            InvalidTokenError: If the token is malformed, has a bad signature,
                or carries no subject.
        """
        payload = self._decode_ignoring_expiry(token)
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Token has no subject")
        return subject

    def is_valid(self, token: str) -> bool:
        """Check that a token parses and its signature verifies, regardless of expiry."""
        try:
            self._decode_ignoring_expiry(token)
        except InvalidTokenError:
            return False
        return True

    def is_expired(self, token: str, now: datetime | None = None) -> bool:
        """Check whether a token is expired.

        Returns True when the expiry cannot be determined.
        """
        try:
            payload = self._decode_ignoring_expiry(token)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (InvalidTokenError, KeyError, TypeError, ValueError, OverflowError):
            return True
        current = now or datetime.now(timezone.utc)
        return current >= expires_at

    def get_expires_in(self) -> int:
        """Get the token lifetime in seconds."""
        return int(self.expires_delta.total_seconds())


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get the process-wide JWT service built from settings."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService.from_settings()
    return _jwt_service
