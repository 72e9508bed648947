"""
Session Entity

Server-side record that keeps a bearer token alive.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from todo_auth.domain.base import utc_now

if TYPE_CHECKING:
    from .user import User


class Session(SQLModel, table=True):
    """
    Session entity - binds an issued bearer token to a user until expires_at.

    Business Rules:
    - A bearer token is valid only while the session it names exists and
      has not expired
    - Login deletes every other session of the user (one active session)
    - Logout deletes the session; sessions are never updated in place
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(
        foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE"
    )
    token: str = Field(unique=True, max_length=128)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    # Relationships
    user: Optional["User"] = Relationship(back_populates="sessions")

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
