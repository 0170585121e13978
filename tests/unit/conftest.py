import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.auth_settings import AuthSettings
from src.domain.entities import User, UserRole
from tests.fixtures.accounts import FIXTURE_PASSWORD_HASH
from tests.fixtures.in_memory_users import InMemoryUserRepository


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_email_or_username = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update_fields = AsyncMock(return_value=True)
    uow.users.find_by_token_digest = AsyncMock()
    return uow


@pytest.fixture
def auth_settings():
    return AuthSettings(
        access_token_secret="test-access-secret",
        refresh_token_secret="test-refresh-secret",
    )


@pytest.fixture
def dispatcher():
    return MagicMock()


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def make_user():
    def _make_user(**overrides) -> User:
        fields = {
            "email": "alice@example.com",
            "username": "alice",
            "password_hash": FIXTURE_PASSWORD_HASH,
            "role": UserRole.member,
        }
        fields.update(overrides)
        return User(**fields)

    return _make_user


@pytest.fixture
def memory_uow(users):
    """UnitOfWork double whose users repository keeps state between calls"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.users = users
    return uow
