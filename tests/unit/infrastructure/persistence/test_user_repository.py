"""Unit tests for UserRepository."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from resumebuilder.domain.entities import VerificationToken
from resumebuilder.domain.exceptions import EmailAlreadyExistsError
from resumebuilder.infrastructure.persistence.models import UserModel
from resumebuilder.infrastructure.persistence.repositories import (
    UserRepository,
    normalize_email,
)


def make_user(email: str = "alice@example.com", **overrides) -> UserModel:
    fields = {
        "id": str(uuid.uuid4()),
        "name": "Alice",
        "email": email,
        "password_hash": "hashed",
        "email_verified": False,
        "verification_token": str(uuid.uuid4()),
        "verification_expires": datetime.now(timezone.utc) + timedelta(hours=24),
    }
    fields.update(overrides)
    return UserModel(**fields)


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()

        fetched = await repo.get_by_id(user.id)
        assert fetched is not None
        await db_session.refresh(fetched)
        assert fetched.email == "alice@example.com"
        assert fetched.subscription_plan == "Basic"
        assert fetched.created_at is not None

    @pytest.mark.asyncio
    async def test_lookup_by_email_is_case_insensitive(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()

        assert (await repo.get_by_email("ALICE@example.com")).id == user.id
        assert await repo.email_exists("Alice@Example.com") is True
        assert await repo.email_exists("bob@example.com") is False

    @pytest.mark.asyncio
    async def test_duplicate_email_raises(self, db_session):
        repo = UserRepository(db_session)
        await repo.create(make_user())
        await db_session.commit()

        with pytest.raises(EmailAlreadyExistsError):
            await repo.create(make_user())

    @pytest.mark.asyncio
    async def test_get_by_verification_token(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()

        assert (await repo.get_by_verification_token(user.verification_token)).id == user.id
        assert await repo.get_by_verification_token("unknown") is None

    @pytest.mark.asyncio
    async def test_mark_verified_consumes_token_once(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()
        token = user.verification_token

        assert await repo.mark_verified(user.id, token) is True
        await db_session.commit()
        assert await repo.mark_verified(user.id, token) is False

        await db_session.refresh(user)
        assert user.email_verified is True
        assert user.verification_token is None
        assert user.verification_expires is None

    @pytest.mark.asyncio
    async def test_mark_verified_requires_matching_token(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()

        assert await repo.mark_verified(user.id, "stale-token") is False
        await db_session.refresh(user)
        assert user.email_verified is False

    @pytest.mark.asyncio
    async def test_replace_verification_token(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(make_user())
        await db_session.commit()
        new_token = VerificationToken.generate(timedelta(hours=24))

        assert await repo.replace_verification_token(user.id, new_token) is True
        await db_session.commit()
        await db_session.refresh(user)
        assert user.verification_token == new_token.value

    @pytest.mark.asyncio
    async def test_replace_token_skips_verified_user(self, db_session):
        repo = UserRepository(db_session)
        user = await repo.create(
            make_user(email_verified=True, verification_token=None, verification_expires=None)
        )
        await db_session.commit()

        replaced = await repo.replace_verification_token(
            user.id, VerificationToken.generate(timedelta(hours=24))
        )
        assert replaced is False
        await db_session.refresh(user)
        assert user.verification_token is None
