"""
Validate Session Use Case

Resolves a bearer token to a live session and its user.
"""

from uuid import UUID

from todo_auth.libs.result import Error, Result, Return
from todo_auth.api.utils.jwt import TokenCodec
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.domain.base import utc_now
from todo_auth.domain.errors import AuthErrorCode, AuthMessages, TokenError
from .dtos import SessionValidationResponse


class ValidateSessionUseCase:
    """
    Use case for validating a bearer token against the session store.

    Business Rules:
    - Token must pass signature, claims and environment checks
    - The session named by the token must exist and not be expired
    - The session owner must be the user embedded in the token
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, token: str) -> Result[SessionValidationResponse]:
        """
        Execute validate session use case.

        Args:
            token: Bearer token

        Returns:
            Result with SessionValidationResponse, or
            Error(INVALID_TOKEN | SESSION_EXPIRED | UNAUTHORIZED)
        """
        try:
            payload = self.token_codec.verify_token(token)
            session_id = UUID(payload.session_id)
        except TokenError as exc:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, str(exc)))
        except ValueError:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, "Invalid token payload"))

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)

            if session is None or session.expires_at < utc_now():
                return Return.err(
                    Error(AuthErrorCode.SESSION_EXPIRED, AuthMessages.SESSION_EXPIRED)
                )

            if session.user is None or str(session.user.id) != payload.user.id:
                return Return.err(
                    Error(AuthErrorCode.UNAUTHORIZED, AuthMessages.UNAUTHORIZED)
                )

            return Return.ok(
                SessionValidationResponse(
                    user=CredentialHasher.sanitize_user(session.user),
                    expires_at=session.expires_at,
                )
            )
