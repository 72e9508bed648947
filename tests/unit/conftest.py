import pytest
from unittest.mock import AsyncMock, MagicMock

from todo_auth.api.utils.jwt import TokenCodec
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.rate_limiter import RateLimiter

TEST_AUTH_SECRET_KEY = "unit-test-auth-secret-key-0123456789abcdef"
TEST_JWT_SECRET = "unit-test-jwt-secret"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update_password = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.delete_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_by_id = AsyncMock(return_value=True)

    return uow


@pytest.fixture
def hasher():
    # One round keeps the suite fast; deployments use PASSWORD_HASH_ROUNDS
    return CredentialHasher(TEST_AUTH_SECRET_KEY, rounds=1)


@pytest.fixture
def rate_limiter():
    return RateLimiter(max_attempts=10, window_seconds=15 * 60)


@pytest.fixture
def token_codec():
    return TokenCodec(TEST_JWT_SECRET, environment="test")
