"""Pydantic schemas for API request/response validation."""

from resumebuilder.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResendVerificationRequest,
    ResendVerificationResponse,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResendVerificationRequest",
    "ResendVerificationResponse",
]
