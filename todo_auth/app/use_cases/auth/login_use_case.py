"""
Login Use Case

Handles email/password authentication and issues a session-bound bearer token.
"""

import logging

from todo_auth.libs.result import Error, Result, Return
from todo_auth.api.utils.jwt import TokenCodec, TokenUser
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.rate_limiter import RateLimiter
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.domain.base import utc_now
from todo_auth.domain.constants import SESSION_EXPIRY_DEFAULT, SESSION_EXPIRY_REMEMBER_ME
from todo_auth.domain.entities import Session
from todo_auth.domain.errors import AuthErrorCode, AuthMessages
from .dtos import AuthResponse, LoginCommand

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Rate limit is checked before any database access
    - Unknown email and wrong password produce the same error
    - A throwaway hash is computed for unknown emails to keep timing similar
    - Successful login clears the rate limit for the email
    - All existing sessions of the user are deleted (one active session)
    - New session lasts 24 hours, or 30 days with remember_me
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        rate_limiter: RateLimiter,
        token_codec: TokenCodec,
    ):
        self.uow = uow
        self.hasher = hasher
        self.rate_limiter = rate_limiter
        self.token_codec = token_codec

    async def execute(self, command: LoginCommand) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email, password and remember_me flag

        Returns:
            Result with AuthResponse, or Error(RATE_LIMITED | INVALID_CREDENTIALS)
        """
        if not self.rate_limiter.check_rate_limit(command.email):
            logger.warning("Login rate limit exceeded")
            return Return.err(Error(AuthErrorCode.RATE_LIMITED, AuthMessages.RATE_LIMIT))

        invalid_credentials = Error(
            AuthErrorCode.INVALID_CREDENTIALS, AuthMessages.INVALID_CREDENTIALS
        )

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            if user is None:
                # Hash anyway so response time does not reveal unknown emails
                await self.hasher.hash_password(
                    command.password or "-", self.hasher.generate_salt()
                )
                return Return.err(invalid_credentials)

            password_valid = await self.hasher.verify_password(
                command.password,
                user.password_hash,
                user.password_salt,
                user.password_rounds,
            )
            if not password_valid:
                return Return.err(invalid_credentials)

            self.rate_limiter.clear_rate_limit(command.email)

            revoked = await self.uow.sessions.delete_by_user_id(user.id)

            expiry = (
                SESSION_EXPIRY_REMEMBER_ME if command.remember_me else SESSION_EXPIRY_DEFAULT
            )
            session = await self.uow.sessions.create(
                Session(
                    user_id=user.id,
                    token=self.hasher.generate_session_token(),
                    expires_at=utc_now() + expiry,
                )
            )

            # Delete and insert land in the same transaction
            await self.uow.commit()

            user_info = self.hasher.sanitize_user(user)
            expires_at = session.expires_at
            token = self.token_codec.create_token(
                TokenUser(id=user_info.id, email=user_info.email, name=user_info.name),
                session_id=str(session.id),
            )

        logger.info(f"User logged in: {user_info.id} (replaced {revoked} session(s))")

        return Return.ok(AuthResponse(user=user_info, token=token, expires_at=expires_at))
