"""
Update Password Use Case

Replaces the password of a signed-in user after re-checking the current one.
"""

import logging
from uuid import UUID

from todo_auth.libs.result import Error, Result, Return
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.domain.errors import AuthErrorCode, AuthMessages

logger = logging.getLogger(__name__)


class UpdatePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - Current password must verify
    - New password must satisfy the password policy
    - A fresh salt is generated for the new hash, derived with the current rounds
    - Existing sessions stay valid
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[None]:
        """
        Execute update password use case.

        Args:
            user_id: Authenticated user
            current_password: Password to re-verify
            new_password: Replacement password

        Returns:
            Result with None, or Error(UNAUTHORIZED | VALIDATION_ERROR)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error(AuthErrorCode.UNAUTHORIZED, AuthMessages.UNAUTHORIZED)
                )

            password_valid = await self.hasher.verify_password(
                current_password,
                user.password_hash,
                user.password_salt,
                user.password_rounds,
            )
            if not password_valid:
                logger.warning(f"Password change rejected for user {user_id}")
                return Return.err(
                    Error(AuthErrorCode.UNAUTHORIZED, AuthMessages.UNAUTHORIZED)
                )

            violations = self.hasher.password_policy_violations(new_password)
            if violations:
                return Return.err(
                    Error(
                        AuthErrorCode.VALIDATION_ERROR,
                        f"{AuthMessages.WEAK_PASSWORD}: password {', '.join(violations)}",
                    )
                )

            password_salt = self.hasher.generate_salt()
            password_hash = await self.hasher.hash_password(new_password, password_salt)

            await self.uow.users.update_password(
                user.id, password_hash, password_salt, self.hasher.rounds
            )
            await self.uow.commit()

        logger.info(f"Password updated for user {user_id}")
        return Return.ok(None)
