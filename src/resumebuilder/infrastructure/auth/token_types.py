"""Principal attached to authenticated requests."""

from dataclasses import dataclass

from resumebuilder.infrastructure.persistence.models import UserModel


@dataclass(frozen=True)
class AuthenticatedUser:
    """Represents an authenticated user in the request context."""

    user_id: str
    email: str
    name: str
    email_verified: bool

    @property
    def id(self) -> str:
        """Alias for user_id to maintain compatibility with code expecting user.id."""
        return self.user_id

    @classmethod
    def from_model(cls, user: UserModel) -> "AuthenticatedUser":
        return cls(
            user_id=user.id,
            email=user.email,
            name=user.name,
            email_verified=user.email_verified,
        )
