"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Responses serialize with camelCase keys (expiresAt, isVerified) for the web client.
"""

from datetime import datetime

from pydantic import BaseModel, field_serializer

from todo_auth.domain.user_info import CamelModel, UserInfo, as_utc


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Registration intent, created by the API layer"""

    email: str
    password: str
    confirm_password: str
    name: str


class LoginCommand(BaseModel):
    """Login intent, created by the API layer"""

    email: str
    password: str
    remember_me: bool = False


# ============================================================================
# Response DTOs
# ============================================================================


class AuthResponse(CamelModel):
    """Response for register and login use cases"""

    user: UserInfo
    token: str
    expires_at: datetime

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> datetime:
        return as_utc(value)


class SessionValidationResponse(CamelModel):
    """Response for session validation use case"""

    user: UserInfo
    expires_at: datetime

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> datetime:
        return as_utc(value)
