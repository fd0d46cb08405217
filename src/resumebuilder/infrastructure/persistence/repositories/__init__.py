"""Persistence repositories for database operations."""

from resumebuilder.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
    normalize_email,
)

__all__ = [
    "UserRepository",
    "normalize_email",
]
