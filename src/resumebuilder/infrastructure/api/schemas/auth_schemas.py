"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from resumebuilder.infrastructure.persistence.models import UserModel


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RegisterRequest(CamelModel):
    """Request body for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    name: str = Field(..., min_length=2, max_length=25, description="Display name")
    password: str = Field(..., min_length=6, description="User's password")
    profile_image_url: str | None = Field(None, description="Uploaded profile image URL")


class LoginRequest(CamelModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class ResendVerificationRequest(CamelModel):
    """Request body for resending the verification email.

    The email is optional here so a missing value can be answered with the
    dedicated "email is required" message.
    """

    email: str | None = Field(None, description="Email address of the account")


class AuthResponse(CamelModel):
    """Public view of a user, returned by register, login and profile."""

    id: str = Field(..., alias="_id", description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
    profile_image_url: str | None = Field(None, description="Profile image URL")
    subscription_plan: str = Field(..., description="Subscription plan label")
    email_verified: bool = Field(..., description="Whether the email is verified")
    token: str | None = Field(None, description="JWT access token (login only)")
    created_at: datetime | None = Field(None, description="When the user was created")
    updated_at: datetime | None = Field(None, description="When the user was last updated")

    @classmethod
    def from_user(cls, user: UserModel, token: str | None = None) -> "AuthResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            profile_image_url=user.profile_image_url,
            subscription_plan=user.subscription_plan,
            email_verified=user.email_verified,
            token=token,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class MessageResponse(BaseModel):
    """Response carrying a human-readable message."""

    message: str


class ResendVerificationResponse(BaseModel):
    """Response for a successful resend."""

    success: bool
    message: str
