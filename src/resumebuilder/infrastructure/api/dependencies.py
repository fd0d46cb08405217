"""FastAPI dependencies for authentication and service wiring."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from resumebuilder.core.config import Settings, get_settings
from resumebuilder.core.logging import get_logger
from resumebuilder.domain.exceptions import NotAuthenticatedError
from resumebuilder.domain.services import AuthService, EmailVerificationService
from resumebuilder.infrastructure.auth import AuthenticatedUser, JWTService, get_jwt_service
from resumebuilder.infrastructure.persistence.database import get_db_session
from resumebuilder.infrastructure.persistence.repositories import UserRepository
from resumebuilder.infrastructure.services.email_service import (
    EmailService,
    get_email_service,
)

logger = get_logger(__name__)


async def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Build the auth service for the current request."""
    return AuthService(
        session=session,
        user_repo=UserRepository(session),
        email_service=email_service,
        jwt_service=jwt_service,
        verification_service=EmailVerificationService(
            token_lifetime=timedelta(hours=settings.verification_token_expire_hours)
        ),
        store_timeout=settings.store_timeout_seconds,
        email_timeout=settings.email_timeout_seconds,
    )


async def get_current_user(request: Request) -> AuthenticatedUser:
    """Return the principal resolved by AuthenticationMiddleware.

    Raises:
        NotAuthenticatedError: If the request carries no valid bearer token.
    """
    user = getattr(request.state, "authenticated_user", None)
    if user is None:
        logger.info("Authentication required", path=request.url.path)
        raise NotAuthenticatedError()
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
