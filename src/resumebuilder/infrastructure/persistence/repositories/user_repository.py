"""User repository for database operations."""

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from resumebuilder.core.logging import get_logger
from resumebuilder.domain.entities.verification_token import VerificationToken
from resumebuilder.domain.exceptions import EmailAlreadyExistsError
from resumebuilder.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup.

    Emails are compared case-insensitively, so they are stored lower-cased.
    """
    return email.strip().lower()


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create. Its email must already be normalized.

        Returns:
            Created user model.

        Raises:
            EmailAlreadyExistsError: If the unique email constraint is violated.
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("User insert rejected by unique constraint", email=user.email)
            raise EmailAlreadyExistsError() from e
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address (case-insensitive)."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an account already uses this email address."""
        result = await self.session.execute(
            select(UserModel.id)
            .where(UserModel.email == normalize_email(email))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_by_verification_token(self, token: str) -> UserModel | None:
        """Get the user currently holding a verification token.

        Tokens carry no uniqueness constraint; the first holder is returned.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.verification_token == token).limit(1)
        )
        return result.scalars().first()

    async def mark_verified(self, user_id: str, token: str) -> bool:
        """Atomically consume a verification token.

        The update only applies while the user still holds ``token``, so two
        concurrent verifications cannot both succeed.

        Args:
            user_id: ID of the user to verify.
            token: The token that must still be stored on the user.

        Returns:
            True if this call verified the user, False if the token was gone.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(
                and_(
                    UserModel.id == user_id,
                    UserModel.verification_token == token,
                )
            )
            .values(
                email_verified=True,
                verification_token=None,
                verification_expires=None,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def replace_verification_token(
        self, user_id: str, token: VerificationToken
    ) -> bool:
        """Store a new verification token on a still-unverified user.

        Args:
            user_id: ID of the user.
            token: The newly issued token.

        Returns:
            True if the user was updated, False if it is missing or verified.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(
                and_(
                    UserModel.id == user_id,
                    UserModel.email_verified.is_(False),
                )
            )
            .values(
                verification_token=token.value,
                verification_expires=token.expires_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
