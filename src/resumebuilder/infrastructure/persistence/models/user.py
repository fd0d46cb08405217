"""SQLAlchemy model for the users table.

Users are uniquely identified by their (normalized) email address.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from resumebuilder.infrastructure.persistence.database import Base

DEFAULT_SUBSCRIPTION_PLAN = "Basic"


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        email: Lower-cased email address (unique).
        password_hash: Hashed password.
        profile_image_url: Optional avatar URL set by the upload flow.
        subscription_plan: Free-form plan label.
        email_verified: Whether the email address has been confirmed.
        verification_token: Pending verification token (null once verified).
        verification_expires: Deadline of the pending verification token.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="User ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (lower-cased)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    profile_image_url: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
    )
    subscription_plan: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default=DEFAULT_SUBSCRIPTION_PLAN,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    verification_token: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="Pending email verification token",
    )
    verification_expires: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Verification token is valid strictly before this instant",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, verified={self.email_verified})>"
