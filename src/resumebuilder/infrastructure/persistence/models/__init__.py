"""SQLAlchemy models for ResumeBuilder tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup outside production.
"""

from resumebuilder.infrastructure.persistence.models.user import UserModel

__all__ = [
    "UserModel",
]
