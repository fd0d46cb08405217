"""Infrastructure layer - External dependencies and implementations.

This layer contains:
- Database access (SQLAlchemy, async)
- HTTP API (FastAPI)
- Authentication (Argon2 password hashing, JWT, request middleware)
- Email delivery (SMTP, console)
"""

from resumebuilder.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
    "init_database",
    "close_database",
]
