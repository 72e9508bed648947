import logging

from todo_auth.libs.result import Error, Result, Return
from todo_auth.api.utils.jwt import TokenCodec, TokenUser
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.unit_of_work import UnitOfWork
from todo_auth.domain.base import utc_now
from todo_auth.domain.constants import SESSION_EXPIRY_DEFAULT
from todo_auth.domain.entities import Session, User
from todo_auth.domain.errors import AuthErrorCode, AuthMessages, DuplicateEmailError
from .dtos import AuthResponse, RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[AuthResponse]

    Business Logic:
    1. Validate email shape, password confirmation and password strength
    2. Reject an email that is already registered
    3. Generate salt and hash the password
    4. Create User (is_verified=False)
    5. Create Session with the default expiry
    6. Commit, then issue a bearer token bound to the session
    """

    def __init__(
        self, uow: UnitOfWork, hasher: CredentialHasher, token_codec: TokenCodec
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_codec = token_codec

    def _validate(self, command: RegisterCommand) -> Error | None:
        if not self.hasher.validate_email(command.email):
            return Error(AuthErrorCode.VALIDATION_ERROR, AuthMessages.INVALID_EMAIL)

        if command.password != command.confirm_password:
            return Error(AuthErrorCode.VALIDATION_ERROR, AuthMessages.PASSWORD_MISMATCH)

        violations = self.hasher.password_policy_violations(command.password)
        if violations:
            return Error(
                AuthErrorCode.VALIDATION_ERROR,
                f"{AuthMessages.WEAK_PASSWORD}: password {', '.join(violations)}",
            )
        return None

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password, confirm_password, name

        Returns:
            Result[AuthResponse] with sanitized user, token and session expiry,
            or Error(VALIDATION_ERROR | DUPLICATE_EMAIL)
        """
        error = self._validate(command)
        if error is not None:
            return Return.err(error)

        duplicate_email = Error(AuthErrorCode.DUPLICATE_EMAIL, AuthMessages.EMAIL_EXISTS)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(duplicate_email)

            password_salt = self.hasher.generate_salt()
            password_hash = await self.hasher.hash_password(
                command.password, password_salt
            )

            try:
                user = await self.uow.users.create(
                    User(
                        email=command.email,
                        name=command.name,
                        password_hash=password_hash,
                        password_salt=password_salt,
                        password_rounds=self.hasher.rounds,
                        is_verified=False,
                    )
                )
            except DuplicateEmailError:
                # Lost a race with a concurrent registration of the same email
                logger.warning("Registration raced on an existing email")
                return Return.err(duplicate_email)

            session = await self.uow.sessions.create(
                Session(
                    user_id=user.id,
                    token=self.hasher.generate_session_token(),
                    expires_at=utc_now() + SESSION_EXPIRY_DEFAULT,
                )
            )

            await self.uow.commit()

            user_info = self.hasher.sanitize_user(user)
            expires_at = session.expires_at
            token = self.token_codec.create_token(
                TokenUser(id=user_info.id, email=user_info.email, name=user_info.name),
                session_id=str(session.id),
            )

        logger.info(f"User registered: {user_info.id}")

        return Return.ok(
            AuthResponse(user=user_info, token=token, expires_at=expires_at)
        )
