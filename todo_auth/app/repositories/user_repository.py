from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from todo_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (exact match)"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmailError on an email collision."""
        pass

    @abstractmethod
    async def update_password(
        self, user_id: UUID, password_hash: str, password_salt: str, password_rounds: int
    ) -> None:
        """Replace password hash, salt and KDF rounds, touching updated_at"""
        pass
