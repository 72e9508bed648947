"""
Logout Use Case

Deletes the session a bearer token refers to, revoking the token.
"""

import logging
from uuid import UUID

from todo_auth.libs.result import Error, Result, Return
from todo_auth.api.utils.jwt import TokenCodec
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.domain.errors import AuthErrorCode, TokenError

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Token must verify; its session is deleted
    - Deleting an already deleted session is not an error (idempotent)
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, token: str) -> Result[None]:
        try:
            payload = self.token_codec.verify_token(token)
            session_id = UUID(payload.session_id)
        except TokenError as exc:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, str(exc)))
        except ValueError:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, "Invalid token payload"))

        async with self.uow:
            deleted = await self.uow.sessions.delete_by_id(session_id)
            await self.uow.commit()

        if deleted:
            logger.info(f"Session revoked by logout: {session_id}")
        return Return.ok(None)
