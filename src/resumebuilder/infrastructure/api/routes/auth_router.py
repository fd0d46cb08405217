"""Authentication API routes.

Provides endpoints for registration, email verification, login and the
authenticated user's profile.
"""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from resumebuilder.core.logging import get_logger
from resumebuilder.domain.exceptions import UserNotFoundError
from resumebuilder.infrastructure.api.dependencies import AuthServiceDep, CurrentUser
from resumebuilder.infrastructure.api.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResendVerificationRequest,
    ResendVerificationResponse,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Conflict - email already exists"},
        502: {"description": "Account created but verification email failed"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Register a new user and send the verification email.

    Flow:
    1. Reject a duplicate email
    2. Hash password and issue a verification token
    3. Persist the unverified user
    4. Send the verification link
    """
    user = await auth_service.register(
        email=request.email,
        name=request.name,
        password=request.password,
        profile_image_url=request.profile_image_url,
    )
    return AuthResponse.from_user(user)


@router.get(
    "/verify-email",
    response_model=MessageResponse,
    responses={
        400: {"description": "Token expired"},
        404: {"description": "Invalid token"},
    },
)
async def verify_email(
    auth_service: AuthServiceDep,
    token: str = Query(..., min_length=1, description="Verification token"),
) -> MessageResponse:
    """Verify an email address using the token from the verification link."""
    await auth_service.verify_email(token)
    return MessageResponse(message="email verified successfully")


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Email not verified"},
    },
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Authenticate a user and return the profile with a JWT access token.

    Security:
    - Unknown email and wrong password return the same 401 message
    """
    user, token = await auth_service.login(request.email, request.password)
    return AuthResponse.from_user(user, token=token)


@router.post(
    "/resend-verification",
    response_model=ResendVerificationResponse,
    responses={
        400: {"description": "Email is required"},
        404: {"description": "User not found"},
        409: {"description": "User already verified"},
    },
)
async def resend_verification(
    request: ResendVerificationRequest, auth_service: AuthServiceDep
) -> ResendVerificationResponse | JSONResponse:
    """Send a new verification link to an unverified account."""
    if not request.email:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "email is required"},
        )

    await auth_service.resend_verification(request.email)
    return ResendVerificationResponse(success=True, message="verification email sent")


@router.get(
    "/profile",
    response_model=AuthResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def profile(current_user: CurrentUser, auth_service: AuthServiceDep) -> AuthResponse:
    """Return the profile of the authenticated user."""
    user = await auth_service.get_user(current_user.user_id)
    if user is None:
        raise UserNotFoundError()
    return AuthResponse.from_user(user)
