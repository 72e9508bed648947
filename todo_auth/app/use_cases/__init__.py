"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    ValidateSessionUseCase,
    LogoutUseCase,
    UpdatePasswordUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "UpdatePasswordUseCase",
]
