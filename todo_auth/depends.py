from datetime import datetime
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from todo_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from todo_auth.api.error import ClientError
from todo_auth.api.utils.jwt import TokenCodec
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.rate_limiter import RateLimiter
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.app.use_cases.auth import UserInfo, ValidateSessionUseCase
from todo_auth.domain.constants import SESSION_COOKIE_NAME
from todo_auth.domain.errors import AuthErrorCode, AuthMessages
from todo_auth.libs.result import Error

security = HTTPBearer(auto_error=False)


class AuthenticatedUser(BaseModel):
    """Identity attached to request.state.user by get_current_user"""

    user: UserInfo
    expires_at: datetime
    token: str


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_credential_hasher(request: Request) -> CredentialHasher:
    return request.app.state.credential_hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Bearer header first, then the session cookie"""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE_NAME) or None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> AuthenticatedUser:
    """
    Dependency that authenticates the request.

    Extracts the token from the Authorization header or the session cookie,
    validates it against the session store and attaches the identity to
    request.state.user.

    Raises:
        ClientError: 401 if no token is present or validation fails
    """
    token = extract_token(request, credentials)
    if not token:
        raise ClientError(
            Error(
                AuthErrorCode.AUTHENTICATION_REQUIRED,
                AuthMessages.AUTHENTICATION_REQUIRED,
            ),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await ValidateSessionUseCase(uow, token_codec).execute(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    identity = AuthenticatedUser(
        user=result.value.user, expires_at=result.value.expires_at, token=token
    )
    request.state.user = identity
    return identity
