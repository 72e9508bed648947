from datetime import timedelta
from uuid import uuid4

import pytest

from tests.unit.factories import make_session, make_user
from todo_auth.api.utils.jwt import TokenCodec, TokenUser
from todo_auth.app.use_cases.auth import ValidateSessionUseCase
from todo_auth.domain.errors import AuthErrorCode


def issue(token_codec: TokenCodec, user, session) -> str:
    return token_codec.create_token(
        TokenUser(id=str(user.id), email=user.email, name=user.name),
        session_id=str(session.id),
    )


@pytest.mark.asyncio
async def test_valid_session(mock_uow, hasher, token_codec):
    user = await make_user(hasher)
    session = make_session(user)
    mock_uow.sessions.get_by_id.return_value = session
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(issue(token_codec, user, session))

    assert result.is_ok()
    assert result.value.user.id == str(user.id)
    assert result.value.user.email == "ann@acme.com"
    assert result.value.expires_at == session.expires_at
    mock_uow.sessions.get_by_id.assert_called_once_with(session.id)


@pytest.mark.asyncio
async def test_expired_session(mock_uow, hasher, token_codec):
    """Token is fine, but the session it names expired"""
    user = await make_user(hasher)
    session = make_session(user, expires_in=timedelta(seconds=-1))
    mock_uow.sessions.get_by_id.return_value = session
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(issue(token_codec, user, session))

    assert result.is_err()
    assert result.error.code == AuthErrorCode.SESSION_EXPIRED
    assert result.error.message == "Session has expired"


@pytest.mark.asyncio
async def test_missing_session(mock_uow, hasher, token_codec):
    user = await make_user(hasher)
    session = make_session(user)
    mock_uow.sessions.get_by_id.return_value = None
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(issue(token_codec, user, session))

    assert result.is_err()
    assert result.error.code == AuthErrorCode.SESSION_EXPIRED


@pytest.mark.asyncio
async def test_session_owned_by_other_user(mock_uow, hasher, token_codec):
    user = await make_user(hasher)
    other = await make_user(hasher, email="bob@acme.com", name="Bob")
    session = make_session(other)
    mock_uow.sessions.get_by_id.return_value = session
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(issue(token_codec, user, session))

    assert result.is_err()
    assert result.error.code == AuthErrorCode.UNAUTHORIZED


@pytest.mark.asyncio
async def test_invalid_token_never_reaches_store(mock_uow, token_codec):
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute("not.a.token")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN
    mock_uow.sessions.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_token_from_other_environment(mock_uow, hasher, token_codec):
    user = await make_user(hasher)
    session = make_session(user)
    mock_uow.sessions.get_by_id.return_value = session
    production = TokenCodec("unit-test-jwt-secret", environment="production")
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(issue(production, user, session))

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN
    assert "environment" in result.error.message


@pytest.mark.asyncio
async def test_token_with_malformed_session_id(mock_uow, token_codec):
    token = token_codec.create_token(
        TokenUser(id=str(uuid4()), email="ann@acme.com", name="Ann"),
        session_id="not-a-uuid",
    )
    use_case = ValidateSessionUseCase(mock_uow, token_codec)

    result = await use_case.execute(token)

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN
