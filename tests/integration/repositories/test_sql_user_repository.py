from datetime import datetime, timedelta

import pytest

from src.adapter.repositories.user_repository import UserRepository
from src.domain.entities import User
from tests.fixtures.accounts import FIXTURE_PASSWORD_HASH


async def _create(db_session, **overrides) -> User:
    fields = {
        "email": "alice@example.com",
        "username": "alice",
        "password_hash": FIXTURE_PASSWORD_HASH,
    }
    fields.update(overrides)
    user = await UserRepository(db_session).create(User(**fields))
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_update_fields_guard_matches(db_session):
    user = await _create(db_session, password_reset_token="abc")
    repo = UserRepository(db_session)

    written = await repo.update_fields(
        user, {"password_reset_token": None}, expected={"password_reset_token": "abc"}
    )
    await db_session.commit()

    assert written is True
    assert user.password_reset_token is None
    reloaded = await repo.get_by_id(user.id)
    assert reloaded.password_reset_token is None


@pytest.mark.asyncio
async def test_update_fields_guard_mismatch_writes_nothing(db_session):
    user = await _create(db_session, password_reset_token="abc")
    repo = UserRepository(db_session)

    written = await repo.update_fields(
        user, {"password_reset_token": None}, expected={"password_reset_token": "xyz"}
    )

    assert written is False
    assert user.password_reset_token == "abc"


@pytest.mark.asyncio
async def test_update_fields_rejects_identity_columns(db_session):
    user = await _create(db_session)

    with pytest.raises(ValueError):
        await UserRepository(db_session).update_fields(user, {"email": "x@example.com"})


@pytest.mark.asyncio
async def test_find_by_token_digest_respects_expiry(db_session):
    now = datetime.utcnow()
    user = await _create(
        db_session,
        email_verification_token="digest",
        email_verification_expires_at=now + timedelta(minutes=5),
    )
    repo = UserRepository(db_session)

    found = await repo.find_by_token_digest(
        "email_verification_token", "email_verification_expires_at", "digest", now
    )
    expired = await repo.find_by_token_digest(
        "email_verification_token",
        "email_verification_expires_at",
        "digest",
        now + timedelta(minutes=5),
    )

    assert found.id == user.id
    assert expired is None


@pytest.mark.asyncio
async def test_create_rejects_invalid_email(db_session):
    with pytest.raises(ValueError):
        await UserRepository(db_session).create(
            User(email="nope", username="bob", password_hash=FIXTURE_PASSWORD_HASH)
        )
