"""Authentication infrastructure components.

This module provides password hashing, JWT token services, and the
request authentication middleware.
"""

from resumebuilder.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    get_jwt_service,
)
from resumebuilder.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from resumebuilder.infrastructure.auth.token_types import AuthenticatedUser

__all__ = [
    "AuthenticatedUser",
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "get_jwt_service",
    "hash_password",
    "verify_password",
]
