from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from todo_auth.domain.constants import APP_NAME, TOKEN_ALGORITHM, TOKEN_EXPIRY
from todo_auth.domain.errors import TokenError


class TokenUser(BaseModel):
    """User snapshot embedded in a bearer token"""

    id: str
    email: str
    name: str


class TokenPayload(BaseModel):
    """Verified claims of a bearer token"""

    model_config = ConfigDict(populate_by_name=True)

    user: TokenUser
    session_id: str = Field(alias="sessionId", min_length=1)
    sub: str
    iss: str
    aud: str
    iat: int
    exp: int


class TokenCodec:
    """
    Issues and verifies environment-scoped bearer tokens.

    Business Rules:
    - HS256 signed, 7-day expiry, iss == aud == APP_NAME, sub == user id
    - Header carries kid/env (deployment tag), jti (uuid4) and iat
    - A token is only accepted by a process running in the same environment
      it was issued in, even when the signature checks out
    """

    def __init__(
        self,
        secret: str,
        environment: str,
        algorithm: str = TOKEN_ALGORITHM,
        expires_in: timedelta = TOKEN_EXPIRY,
        app_name: str = APP_NAME,
    ):
        if not secret:
            raise ValueError("JWT_SECRET is not configured")
        if not environment:
            raise ValueError("Deployment environment is not configured")

        self._secret = secret
        self.environment = environment
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.app_name = app_name

    def create_token(
        self, user: TokenUser, session_id: str, now: Optional[datetime] = None
    ) -> str:
        """
        Create a signed bearer token for a session

        Args:
            user: Snapshot of id, email and name
            session_id: Session the token authorizes

        Returns:
            JWT string (header.payload.signature)
        """
        now = now or datetime.now(UTC)
        claims = {
            "user": user.model_dump(),
            "sessionId": session_id,
            "iss": self.app_name,
            "aud": self.app_name,
            "sub": user.id,
            "iat": now,
            "exp": now + self.expires_in,
        }
        headers = {
            "kid": self.environment,
            "jti": str(uuid4()),
            "env": self.environment,
            "iat": int(now.timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm, headers=headers)

    def verify_token(self, token: str) -> TokenPayload:
        """
        Verify signature, algorithm, issuer, audience and expiry, then the
        environment tag of the header.

        Raises:
            TokenError: on any failed check
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.app_name,
                issuer=self.app_name,
            )
        except JWTError as exc:
            raise TokenError(f"Invalid token: {exc}") from exc

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise TokenError("Invalid token header") from exc

        if header.get("env") != self.environment:
            raise TokenError("Invalid token environment")

        try:
            return TokenPayload.model_validate(claims)
        except ValidationError as exc:
            raise TokenError("Invalid token payload") from exc

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Decode header and claims WITHOUT verification.

        For debugging and inspection only; never use on an authorization path.
        """
        try:
            return {
                "header": jwt.get_unverified_header(token),
                "payload": jwt.get_unverified_claims(token),
            }
        except JWTError as exc:
            raise TokenError("Malformed token") from exc
