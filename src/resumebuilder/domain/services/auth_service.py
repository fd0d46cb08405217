"""Registration, verification and login use cases.

AuthService drives the per-user verification state machine:

    Unregistered --register--> Unverified(token, expires)
    Unverified --verify(valid token)--> Verified
    Unverified --verify(expired token)--> Unverified   (VerificationTokenExpiredError)
    Unverified --resend--> Unverified(new token, new expires)
    Verified --resend--> Verified                      (AlreadyVerifiedError)

Store calls and email sends are bounded by timeouts. Store writes are
shielded so a cancelled request does not abandon them half way.
"""

import asyncio
import uuid
from typing import Any, Awaitable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from resumebuilder.core.logging import get_logger
from resumebuilder.domain.entities.verification_token import VerificationToken
from resumebuilder.domain.exceptions import (
    AlreadyVerifiedError,
    EmailAlreadyExistsError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidVerificationTokenError,
    ServiceUnavailableError,
    UserNotFoundError,
)
from resumebuilder.domain.services.email_verification_service import (
    EmailVerificationService,
)
from resumebuilder.infrastructure.auth.jwt_service import JWTService
from resumebuilder.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from resumebuilder.infrastructure.persistence.models import UserModel
from resumebuilder.infrastructure.persistence.models.user import (
    DEFAULT_SUBSCRIPTION_PLAN,
)
from resumebuilder.infrastructure.persistence.repositories import (
    UserRepository,
    normalize_email,
)
from resumebuilder.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)

T = TypeVar("T")


class AuthService:
    """Service for handling account registration and authentication."""

    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository,
        email_service: EmailService,
        jwt_service: JWTService,
        verification_service: EmailVerificationService,
        store_timeout: float = 5.0,
        email_timeout: float = 10.0,
    ) -> None:
        """Initialize the auth service.

        Args:
            session: SQLAlchemy async session, committed by this service.
            user_repo: Repository for user operations.
            email_service: Service for sending verification emails.
            jwt_service: Service issuing access tokens.
            verification_service: Issues and checks verification tokens.
            store_timeout: Bound on each store call, in seconds.
            email_timeout: Bound on each email send, in seconds.
        """
        self.session = session
        self.user_repo = user_repo
        self.email_service = email_service
        self.jwt_service = jwt_service
        self.verification_service = verification_service
        self.store_timeout = store_timeout
        self.email_timeout = email_timeout

    async def _store(self, call: Awaitable[T], write: bool = False) -> T:
        awaitable: Awaitable[Any] = asyncio.shield(call) if write else call
        try:
            return await asyncio.wait_for(awaitable, timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            logger.warning("User store call timed out", timeout=self.store_timeout)
            raise ServiceUnavailableError() from e

    async def _send_verification(self, user: UserModel) -> None:
        try:
            await asyncio.wait_for(
                self.email_service.send_verification_email(
                    to=user.email,
                    name=user.name,
                    token=user.verification_token,
                ),
                timeout=self.email_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Verification email timed out", user_id=user.id)
            raise ServiceUnavailableError(
                "Verification email could not be sent in time, please request a new one"
            ) from e

    async def register(
        self,
        email: str,
        name: str,
        password: str,
        profile_image_url: str | None = None,
    ) -> UserModel:
        """Register a new, unverified user and send the verification email.

        The user is committed before the email is sent and is kept even if
        sending fails; ``resend_verification`` recovers from that state.

        Raises:
            EmailAlreadyExistsError: If an account already uses the email.
            EmailDeliveryError: If the verification email could not be sent.
            ServiceUnavailableError: If the store or provider timed out.
        """
        email = normalize_email(email)
        if await self._store(self.user_repo.email_exists(email)):
            logger.info("Registration failed: email exists", email=email)
            raise EmailAlreadyExistsError()

        token = self.verification_service.issue()
        user = UserModel(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=hash_password(password),
            profile_image_url=profile_image_url,
            subscription_plan=DEFAULT_SUBSCRIPTION_PLAN,
            email_verified=False,
        )
        self.verification_service.apply(user, token)

        await self._store(self._insert_user(user), write=True)
        logger.info("User registered", user_id=user.id, email=email)

        await self._send_verification(user)
        return user

    async def _insert_user(self, user: UserModel) -> None:
        await self.user_repo.create(user)
        await self.session.commit()
        await self.session.refresh(user)

    async def verify_email(self, token: str) -> UserModel:
        """Consume a verification token and mark its holder verified.

        Raises:
            InvalidVerificationTokenError: If no user holds the token, or a
                concurrent request consumed it first.
            VerificationTokenExpiredError: If the token deadline has passed.
        """
        if not token:
            raise InvalidVerificationTokenError()

        user = await self._store(self.user_repo.get_by_verification_token(token))
        if user is None:
            logger.info("Email verification failed: unknown token")
            raise InvalidVerificationTokenError()

        self.verification_service.consume(user, token)

        if not await self._store(self._consume_token(user, token), write=True):
            logger.info("Email verification lost race for token", user_id=user.id)
            raise InvalidVerificationTokenError()

        logger.info("Email verified successfully", user_id=user.id, email=user.email)
        return user

    async def _consume_token(self, user: UserModel, token: str) -> bool:
        consumed = await self.user_repo.mark_verified(user.id, token)
        await self.session.commit()
        if consumed:
            await self.session.refresh(user)
        return consumed

    async def login(self, email: str, password: str) -> tuple[UserModel, str]:
        """Authenticate a user by email and password.

        Returns:
            Tuple of (user, signed access token).

        Raises:
            InvalidCredentialsError: For an unknown email or wrong password.
            EmailNotVerifiedError: If the user has not verified the email.
        """
        user = await self._store(self.user_repo.get_by_email(email))

        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if not user.email_verified:
            logger.info("Login failed: email not verified", user_id=user.id)
            raise EmailNotVerifiedError()

        access_token = self.jwt_service.create_access_token(user.id)
        logger.info("User logged in", user_id=user.id)
        return user, access_token

    async def resend_verification(self, email: str) -> None:
        """Issue a fresh verification token and email it.

        Raises:
            UserNotFoundError: If no account uses the email.
            AlreadyVerifiedError: If the account is already verified.
        """
        user = await self._store(self.user_repo.get_by_email(email))
        if user is None:
            raise UserNotFoundError()
        if user.email_verified:
            raise AlreadyVerifiedError()

        token = self.verification_service.issue()
        if not await self._store(self._replace_token(user, token), write=True):
            # Verified between the read and the update
            raise AlreadyVerifiedError()

        logger.info("Verification token reissued", user_id=user.id)
        await self._send_verification(user)

    async def _replace_token(self, user: UserModel, token: VerificationToken) -> bool:
        replaced = await self.user_repo.replace_verification_token(user.id, token)
        await self.session.commit()
        if replaced:
            self.verification_service.apply(user, token)
        return replaced

    async def get_user(self, user_id: str) -> UserModel | None:
        """Load a user by ID."""
        return await self._store(self.user_repo.get_by_id(user_id))
