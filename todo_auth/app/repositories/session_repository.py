from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from todo_auth.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID with its owning user loaded"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user. Returns count of deleted sessions."""
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session. Returns True if it existed."""
        pass
