"""
Unit tests for SessionTokenManager

Runs against the in-memory user repository so the stored refresh token
behaves like the real column.
"""
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.api.utils.jwt import generate_refresh_token, verify_access_token
from src.app.errors import INTERNAL_ERROR, INVALID_TOKEN
from src.app.services.auth_settings import AuthSettings
from src.app.services.session_tokens import SessionTokenManager
from src.domain.entities import UserRole


@pytest.mark.asyncio
async def test_issue_pair_persists_refresh_token(users, auth_settings, make_user):
    user = await users.create(make_user(role=UserRole.admin))
    manager = SessionTokenManager(users, auth_settings)

    result = await manager.issue_pair(user.id)

    assert result.is_ok()
    pair = result.value
    assert users.rows[user.id].refresh_token == pair.refresh_token

    claims = verify_access_token(auth_settings, pair.access_token)
    assert claims["user_id"] == str(user.id)
    assert claims["role"] == "admin"
    assert "exp" in claims and "iat" in claims


@pytest.mark.asyncio
async def test_rotate_returns_new_refresh_token(users, auth_settings, make_user):
    user = await users.create(make_user())
    manager = SessionTokenManager(users, auth_settings)
    first = (await manager.issue_pair(user.id)).value

    result = await manager.rotate(first.refresh_token)

    assert result.is_ok()
    assert result.value.refresh_token != first.refresh_token
    assert users.rows[user.id].refresh_token == result.value.refresh_token


@pytest.mark.asyncio
async def test_rotate_consecutive_tokens_all_differ(users, auth_settings, make_user):
    user = await users.create(make_user())
    manager = SessionTokenManager(users, auth_settings)
    token = (await manager.issue_pair(user.id)).value.refresh_token

    seen = {token}
    for _ in range(5):
        token = (await manager.rotate(token)).value.refresh_token
        assert token not in seen
        seen.add(token)


@pytest.mark.asyncio
async def test_rotate_rejects_expired_token(users, auth_settings, make_user):
    user = await users.create(make_user())
    expired = generate_refresh_token(auth_settings, user.id, expires_delta=timedelta(seconds=-5))
    user.refresh_token = expired

    result = await SessionTokenManager(users, auth_settings).rotate(expired)

    assert result.is_err()
    assert result.error.code == INVALID_TOKEN


@pytest.mark.asyncio
async def test_rotate_rejects_tampered_token(users, auth_settings, make_user):
    user = await users.create(make_user())
    forged_settings = AuthSettings(
        access_token_secret="x", refresh_token_secret="not-the-server-secret"
    )
    forged = generate_refresh_token(forged_settings, user.id)
    user.refresh_token = forged

    manager = SessionTokenManager(users, auth_settings)

    assert (await manager.rotate(forged)).error.code == INVALID_TOKEN
    assert (await manager.rotate("not.a.jwt")).error.code == INVALID_TOKEN


@pytest.mark.asyncio
async def test_rotate_rejects_access_token(users, auth_settings, make_user):
    user = await users.create(make_user())
    pair = (await SessionTokenManager(users, auth_settings).issue_pair(user.id)).value

    result = await SessionTokenManager(users, auth_settings).rotate(pair.access_token)

    assert result.error.code == INVALID_TOKEN


@pytest.mark.asyncio
async def test_rotate_rejects_token_of_deleted_user(users, auth_settings, make_user):
    user = await users.create(make_user())
    manager = SessionTokenManager(users, auth_settings)
    pair = (await manager.issue_pair(user.id)).value
    del users.rows[user.id]

    result = await manager.rotate(pair.refresh_token)

    assert result.error.code == INVALID_TOKEN


@pytest.mark.asyncio
async def test_second_issue_supersedes_first_refresh_token(users, auth_settings, make_user):
    user = await users.create(make_user())
    manager = SessionTokenManager(users, auth_settings)
    first = (await manager.issue_pair(user.id)).value
    second = (await manager.issue_pair(user.id)).value

    stale = await manager.rotate(first.refresh_token)
    fresh = await manager.rotate(second.refresh_token)

    assert stale.is_err()
    assert stale.error.code == INVALID_TOKEN
    assert fresh.is_ok()


@pytest.mark.asyncio
async def test_invalidate_is_idempotent_and_blocks_rotation(users, auth_settings, make_user):
    user = await users.create(make_user())
    manager = SessionTokenManager(users, auth_settings)
    pair = (await manager.issue_pair(user.id)).value

    assert (await manager.invalidate(user.id)).is_ok()
    assert users.rows[user.id].refresh_token is None
    assert (await manager.invalidate(user.id)).is_ok()
    assert (await manager.invalidate(uuid4())).is_ok()

    assert (await manager.rotate(pair.refresh_token)).error.code == INVALID_TOKEN


@pytest.mark.asyncio
async def test_issue_pair_store_failure_is_internal_error(auth_settings, make_user):
    user = make_user()
    failing_users = MagicMock()
    failing_users.get_by_id = AsyncMock(return_value=user)
    failing_users.update_fields = AsyncMock(
        side_effect=OperationalError("UPDATE users", {}, Exception("disk I/O error"))
    )

    result = await SessionTokenManager(failing_users, auth_settings).issue_pair(user.id)

    assert result.is_err()
    assert result.error.code == INTERNAL_ERROR
    assert "disk" not in result.error.message
