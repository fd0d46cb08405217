"""Unit tests for EmailVerificationService."""

from datetime import datetime, timedelta, timezone

import pytest

from resumebuilder.domain.exceptions import (
    InvalidVerificationTokenError,
    TokenMismatchError,
    VerificationTokenExpiredError,
)
from resumebuilder.domain.services import DEFAULT_TOKEN_LIFETIME, EmailVerificationService
from resumebuilder.infrastructure.persistence.models import UserModel

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service() -> EmailVerificationService:
    return EmailVerificationService()


@pytest.fixture
def pending_user(service) -> UserModel:
    user = UserModel(
        id="user-1",
        name="Alice",
        email="alice@example.com",
        password_hash="hashed",
        email_verified=False,
    )
    service.apply(user, service.issue(now=NOW))
    return user


class TestIssue:
    """Tests for token issuance."""

    def test_default_lifetime_is_24_hours(self, service):
        token = service.issue(now=NOW)

        assert DEFAULT_TOKEN_LIFETIME == timedelta(hours=24)
        assert token.expires_at == NOW + timedelta(hours=24)

    def test_custom_lifetime(self):
        service = EmailVerificationService(token_lifetime=timedelta(hours=2))

        assert service.issue(now=NOW).expires_at == NOW + timedelta(hours=2)

    def test_apply_stores_token_on_user(self, service, pending_user):
        assert pending_user.verification_token
        assert pending_user.verification_expires == NOW + timedelta(hours=24)


class TestConsume:
    """Tests for consume."""

    def test_valid_token(self, service, pending_user):
        service.consume(pending_user, pending_user.verification_token, now=NOW + timedelta(hours=1))

    def test_token_mismatch(self, service, pending_user):
        with pytest.raises(TokenMismatchError):
            service.consume(pending_user, "some-other-token", now=NOW)

    def test_mismatch_is_an_invalid_token(self):
        assert issubclass(TokenMismatchError, InvalidVerificationTokenError)
        assert TokenMismatchError().status_code == 404

    def test_user_without_token(self, service, pending_user):
        pending_user.verification_token = None

        with pytest.raises(TokenMismatchError):
            service.consume(pending_user, "anything", now=NOW)

    def test_expired_at_deadline(self, service, pending_user):
        with pytest.raises(VerificationTokenExpiredError):
            service.consume(
                pending_user,
                pending_user.verification_token,
                now=NOW + timedelta(hours=24),
            )

    def test_missing_expiry_counts_as_expired(self, service, pending_user):
        pending_user.verification_expires = None

        with pytest.raises(VerificationTokenExpiredError):
            service.consume(pending_user, pending_user.verification_token, now=NOW)

    def test_consume_does_not_mutate_user(self, service, pending_user):
        token = pending_user.verification_token
        service.consume(pending_user, token, now=NOW)

        assert pending_user.verification_token == token
        assert pending_user.email_verified is False
