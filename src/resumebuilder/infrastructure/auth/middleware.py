"""Authentication middleware for ResumeBuilder.

Turns an ``Authorization: Bearer <jwt>`` header into an authenticated
principal on ``request.state.authenticated_user``. The middleware never
rejects a request: when anything is missing or wrong the request simply
continues without a principal, and protected routes answer 401 through the
``get_current_user`` dependency.
"""

import asyncio

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from resumebuilder.core.config import get_settings
from resumebuilder.core.logging import get_logger
from resumebuilder.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    get_jwt_service,
)
from resumebuilder.infrastructure.auth.token_types import AuthenticatedUser
from resumebuilder.infrastructure.persistence.database import (
    DatabaseManager,
    get_db_manager,
)
from resumebuilder.infrastructure.persistence.models import UserModel
from resumebuilder.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
PUBLIC_PATHS = frozenset({"/health", "/ready", "/live"})


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from a ``Bearer`` authorization header, if well formed."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the request principal from a bearer JWT."""

    def __init__(
        self,
        app: ASGIApp,
        jwt_service: JWTService | None = None,
        db_manager: DatabaseManager | None = None,
        lookup_timeout: float | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application.
            jwt_service: Token service. Defaults to the process-wide instance.
            db_manager: Source of store sessions. Defaults to the global manager.
            lookup_timeout: Bound on the user lookup in seconds. Defaults to
                the configured store timeout.
        """
        super().__init__(app)
        self._jwt_service = jwt_service
        self._db_manager = db_manager
        self._lookup_timeout = lookup_timeout

    @property
    def jwt_service(self) -> JWTService:
        return self._jwt_service or get_jwt_service()

    @property
    def db_manager(self) -> DatabaseManager:
        return self._db_manager or get_db_manager()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Authenticate the request and enrich request state.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application.
        """
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        user_id: str | None = None

        if token is not None:
            try:
                user_id = self.jwt_service.parse_subject(token)
            except InvalidTokenError:
                logger.debug("Token is not valid or available", path=request.url.path)

        if user_id is not None and getattr(request.state, "authenticated_user", None) is None:
            try:
                principal = await self._resolve_principal(token, user_id)
                if principal is not None:
                    request.state.authenticated_user = principal
            except Exception as e:
                logger.warning(
                    "Exception occurred while validating the token",
                    error=str(e),
                    exc_type=type(e).__name__,
                    path=request.url.path,
                )

        return await call_next(request)

    async def _resolve_principal(self, token: str, user_id: str) -> AuthenticatedUser | None:
        service = self.jwt_service
        if not service.is_valid(token) or service.is_expired(token):
            logger.debug("Rejected expired or invalid token", user_id=user_id)
            return None

        timeout = self._lookup_timeout or get_settings().store_timeout_seconds
        user = await asyncio.wait_for(self._load_user(user_id), timeout=timeout)
        if user is None:
            logger.info("Token subject does not match any user", user_id=user_id)
            return None
        return AuthenticatedUser.from_model(user)

    async def _load_user(self, user_id: str) -> UserModel | None:
        async with self.db_manager.session() as session:
            return await UserRepository(session).get_by_id(user_id)
