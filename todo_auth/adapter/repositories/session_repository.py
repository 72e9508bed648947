from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_auth.app.repositories.session_repository import ISessionRepository
from todo_auth.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """
        Get session by ID with the owning user eagerly loaded.

        populate_existing makes sure a Session already in the identity map
        gets its user relationship loaded as well.
        """
        stmt = (
            select(Session)
            .where(Session.id == session_id)
            .options(selectinload(Session.user))
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session by ID"""
        stmt = delete(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
