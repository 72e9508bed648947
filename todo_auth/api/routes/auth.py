from typing import Generic, Optional, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from todo_auth.api.error import ClientError, ServerError
from todo_auth.api.utils.jwt import TokenCodec
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.rate_limiter import RateLimiter
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.app.use_cases.auth import (
    AuthResponse,
    LoginCommand,
    LoginUseCase,
    LogoutUseCase,
    RegisterCommand,
    RegisterUseCase,
    SessionValidationResponse,
    UpdatePasswordUseCase,
    UserInfo,
    ValidateSessionUseCase,
)
from todo_auth.domain.user_info import CamelModel
from todo_auth.depends import (
    AuthenticatedUser,
    extract_token,
    get_credential_hasher,
    get_current_user,
    get_rate_limiter,
    get_token_codec,
    get_unit_of_work,
    security,
)
from todo_auth.domain.constants import (
    SESSION_COOKIE_NAME,
    SESSION_EXPIRY_DEFAULT,
    SESSION_EXPIRY_REMEMBER_ME,
)
from todo_auth.domain.errors import AuthErrorCode, AuthMessages
from todo_auth.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {"success": true, "data": ...}"""

    success: bool = True
    data: T


class MeResponse(CamelModel):
    user: UserInfo


class StatusResponse(BaseModel):
    status: str


class LogoutResponse(BaseModel):
    success: bool = True
    message: str


def _secure_cookies(request: Request) -> bool:
    return request.app.state.config.APP_ENV == "production"


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Shape checks only; email format and password strength are enforced by
    RegisterUseCase so every client gets the same rules.
    """

    email: str = Field(..., min_length=1, description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    confirm_password: str = Field(..., min_length=1, description="Password confirmation")
    name: str = Field(..., min_length=2, max_length=255, description="Display name")


@router.post(
    "/register", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuthResponse]
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Registration

    Creates an account and its first session, returns a bearer token.

    Raises:
        - 400 Bad Request: Invalid email, weak or mismatched password, email taken
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
        name=request.name,
    )

    use_case = RegisterUseCase(uow, hasher, token_codec)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in (AuthErrorCode.VALIDATION_ERROR, AuthErrorCode.DUPLICATE_EMAIL):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return ApiResponse[AuthResponse](data=result.value)


class LoginRequest(CamelModel):
    """Login HTTP request payload"""

    email: str = Field(..., min_length=1, description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    remember_me: Optional[bool] = Field(default=False, description="Extend session to 30 days")


@router.post(
    "/login", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuthResponse]
)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Login

    Authenticates the user, replaces any previous session and sets the
    httpOnly session cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Server error
    """
    remember_me = bool(request.remember_me)
    use_case = LoginUseCase(uow, hasher, rate_limiter, token_codec)
    result = await use_case.execute(
        LoginCommand(email=request.email, password=request.password, remember_me=remember_me)
    )

    if result.is_err():
        error = result.error
        if error.code == AuthErrorCode.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == AuthErrorCode.RATE_LIMITED:
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    max_age = SESSION_EXPIRY_REMEMBER_ME if remember_me else SESSION_EXPIRY_DEFAULT
    response.set_cookie(
        SESSION_COOKIE_NAME,
        result.value.token,
        max_age=int(max_age.total_seconds()),
        httponly=True,
        secure=_secure_cookies(http_request),
        samesite="strict",
    )

    return ApiResponse[AuthResponse](data=result.value)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ApiResponse[MeResponse])
async def me(current_user: AuthenticatedUser = Depends(get_current_user)):
    """
    Current User

    Returns the sanitized profile of the authenticated user.

    Raises:
        - 401 Unauthorized: Missing, invalid, revoked or expired token
    """
    return ApiResponse[MeResponse](data=MeResponse(user=current_user.user))


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    http_request: Request,
    response: Response,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Logout

    Deletes the session behind the presented token and clears the cookie.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 400 Bad Request: Logout failed
    """
    use_case = LogoutUseCase(uow, token_codec)
    result = await use_case.execute(current_user.token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    response.delete_cookie(
        SESSION_COOKIE_NAME,
        httponly=True,
        secure=_secure_cookies(http_request),
        samesite="strict",
    )
    return LogoutResponse(message="Logged out successfully")


@router.post(
    "/validate-session",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[SessionValidationResponse],
)
async def validate_session(
    http_request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Session Validation

    Reports whether the presented token still maps to a live session.

    Raises:
        - 401 Unauthorized: Missing, invalid, revoked or expired token
    """
    token = extract_token(http_request, credentials)
    if not token:
        raise ClientError(
            Error(AuthErrorCode.AUTHENTICATION_REQUIRED, "No token provided"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await ValidateSessionUseCase(uow, token_codec).execute(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return ApiResponse[SessionValidationResponse](data=result.value)


class UpdatePasswordRequest(CamelModel):
    """Update password HTTP request payload"""

    id: str = Field(..., min_length=1, description="User ID (must be the caller)")
    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


@router.post(
    "/update-password",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[StatusResponse],
)
async def update_password(
    request: UpdatePasswordRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
):
    """
    Password Update

    Changes the caller's password after re-verifying the current one.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 400 Bad Request: Wrong user id, wrong current password, weak new password
    """
    if current_user.user.id != request.id:
        raise ClientError(
            Error(AuthErrorCode.UNAUTHORIZED, AuthMessages.UNAUTHORIZED_ACCESS),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = UpdatePasswordUseCase(uow, hasher)
    result = await use_case.execute(
        UUID(current_user.user.id), request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in (AuthErrorCode.UNAUTHORIZED, AuthErrorCode.VALIDATION_ERROR):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return ApiResponse[StatusResponse](data=StatusResponse(status="success"))
