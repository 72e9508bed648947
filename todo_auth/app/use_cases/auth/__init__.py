"""
Authentication Use Cases

Together these make up the session authenticator: registration, login,
session validation, logout and password change.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .validate_session_use_case import ValidateSessionUseCase
from .logout_use_case import LogoutUseCase
from .update_password_use_case import UpdatePasswordUseCase
from .dtos import (
    RegisterCommand,
    LoginCommand,
    AuthResponse,
    SessionValidationResponse,
    UserInfo,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "UpdatePasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "LoginCommand",
    # DTOs - Responses
    "AuthResponse",
    "SessionValidationResponse",
    # DTOs - Nested Models
    "UserInfo",
]
