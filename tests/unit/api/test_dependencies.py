"""Unit tests for API dependencies."""

from types import SimpleNamespace

import pytest

from resumebuilder.core.config import Settings
from resumebuilder.domain.exceptions import NotAuthenticatedError
from resumebuilder.domain.services import AuthService
from resumebuilder.infrastructure.api.dependencies import get_auth_service, get_current_user
from resumebuilder.infrastructure.auth import AuthenticatedUser, JWTService


def make_request(user=None):
    state = SimpleNamespace()
    if user is not None:
        state.authenticated_user = user
    return SimpleNamespace(state=state, url=SimpleNamespace(path="/api/auth/profile"))


@pytest.mark.asyncio
async def test_current_user_returned():
    user = AuthenticatedUser(
        user_id="u1", email="alice@example.com", name="Alice", email_verified=True
    )

    assert await get_current_user(make_request(user)) is user
    assert user.id == "u1"


@pytest.mark.asyncio
async def test_missing_principal_raises():
    with pytest.raises(NotAuthenticatedError) as exc_info:
        await get_current_user(make_request())

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Not authorized, no token"


@pytest.mark.asyncio
async def test_auth_service_uses_configured_timeouts(db_session, email_service):
    settings = Settings(
        store_timeout_seconds=1.5,
        email_timeout_seconds=3.0,
        verification_token_expire_hours=2,
    )
    jwt_service = JWTService.from_settings(settings)

    service = await get_auth_service(db_session, email_service, jwt_service, settings)

    assert isinstance(service, AuthService)
    assert service.store_timeout == 1.5
    assert service.email_timeout == 3.0
    assert service.verification_service.token_lifetime.total_seconds() == 2 * 3600
