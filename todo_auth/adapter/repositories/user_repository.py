from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_auth.app.repositories.user_repository import IUserRepository
from todo_auth.domain.base import utc_now
from todo_auth.domain.entities import User
from todo_auth.domain.errors import DuplicateEmailError


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            DuplicateEmailError: another user with the same email was committed
                after the caller checked
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(user.email) from exc
        await self.session.refresh(user)
        return user

    async def update_password(
        self, user_id: UUID, password_hash: str, password_salt: str, password_rounds: int
    ) -> None:
        """Replace password hash, salt and KDF rounds"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                password_hash=password_hash,
                password_salt=password_salt,
                password_rounds=password_rounds,
                updated_at=utc_now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
