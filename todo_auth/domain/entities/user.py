"""
User Entity

Represents a person who can sign in with email and password.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from todo_auth.domain.base import utc_now
from todo_auth.domain.constants import DEFAULT_KDF_ROUNDS

if TYPE_CHECKING:
    from .session import Session


class User(SQLModel, table=True):
    """
    User entity - owner of credentials and sessions.

    Business Rules:
    - Email must be unique across all users (stored as given, case-sensitive)
    - Password stored as a 64-byte KDF output (hex) with its own 32-byte salt (hex)
      and the KDF rounds it was derived with
    - password_hash / password_salt never leave the auth core; see
      CredentialHasher.sanitize_user
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)

    password_hash: str = Field(max_length=128)
    password_salt: str = Field(max_length=64)
    password_rounds: int = Field(default=DEFAULT_KDF_ROUNDS)

    avatar: Optional[str] = Field(default="", max_length=1024)
    is_verified: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    # Relationships
    sessions: list["Session"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
