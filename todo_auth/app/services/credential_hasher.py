"""
Credential Hasher

Salted, peppered password hashing with constant-time verification, plus the
input validators and the user sanitizer used at the service boundary.
"""

import hmac
import logging
import re
import secrets
from typing import List, Optional

import bcrypt
from fastapi.concurrency import run_in_threadpool

from todo_auth.domain.constants import (
    AUTH_SECRET_MIN_LENGTH,
    DEFAULT_KDF_ROUNDS,
    KEY_BYTES,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    RECOMMENDED_KDF_ROUNDS,
    SALT_BYTES,
    SESSION_TOKEN_BYTES,
)
from todo_auth.domain.entities import User
from todo_auth.domain.user_info import UserInfo

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "must contain an uppercase letter"),
    (re.compile(r"[a-z]"), "must contain a lowercase letter"),
    (re.compile(r"\d"), "must contain a number"),
    (re.compile(r"[^A-Za-z0-9]"), "must contain a special character"),
)


class CredentialHasher:
    """
    Password hashing service.

    Business Rules:
    - Derived key = bcrypt_pbkdf(password, salt + secret_key), 64 bytes, hex encoded
    - bcrypt_pbkdf is SHA-512 based; new hashes use the configured rounds and
      each hash is verified with the rounds stored beside it
    - Hashing runs in the threadpool so it never stalls the event loop
    - Verification compares in constant time and never raises
    - secret_key must be at least 32 characters, checked at construction
    """

    def __init__(self, secret_key: str, rounds: int = DEFAULT_KDF_ROUNDS):
        if not secret_key or len(secret_key) < AUTH_SECRET_MIN_LENGTH:
            raise ValueError("Invalid or missing AUTH_SECRET_KEY")
        if rounds < 1:
            raise ValueError("PASSWORD_HASH_ROUNDS must be a positive integer")
        if rounds < RECOMMENDED_KDF_ROUNDS:
            logger.warning(f"Password hashing configured with only {rounds} rounds")

        self._secret_key = secret_key
        self.rounds = rounds

    @staticmethod
    def generate_salt() -> str:
        return secrets.token_hex(SALT_BYTES)

    @staticmethod
    def generate_session_token() -> str:
        return secrets.token_hex(SESSION_TOKEN_BYTES)

    def _derive_key(self, password: str, salt: str, rounds: int) -> str:
        derived = bcrypt.kdf(
            password=password.encode("utf-8"),
            salt=(salt + self._secret_key).encode("utf-8"),
            desired_key_bytes=KEY_BYTES,
            rounds=rounds,
            ignore_few_rounds=True,
        )
        return derived.hex()

    async def hash_password(
        self, password: str, salt: str, rounds: Optional[int] = None
    ) -> str:
        """
        Hash a password with the given salt.

        Args:
            password: Plain text password
            salt: Hex salt from generate_salt()
            rounds: KDF rounds, defaults to the rounds configured for new hashes

        Returns:
            Hex encoded derived key (128 chars)
        """
        return await run_in_threadpool(
            self._derive_key, password, salt, rounds or self.rounds
        )

    async def verify_password(
        self,
        password: str,
        stored_hash: str,
        stored_salt: str,
        stored_rounds: Optional[int] = None,
    ) -> bool:
        """
        Check a password against a stored hash/salt pair, re-deriving with the
        rounds the hash was made with.

        Returns:
            True on match; False on mismatch or on any hashing/decoding error
        """
        try:
            computed = bytes.fromhex(
                await self.hash_password(password, stored_salt, stored_rounds)
            )
            expected = bytes.fromhex(stored_hash)
        except (ValueError, TypeError):
            return False
        return hmac.compare_digest(computed, expected)

    @staticmethod
    def validate_email(email: str) -> bool:
        """Structural local@domain.tld check, not RFC 5322"""
        return bool(EMAIL_PATTERN.match(email or ""))

    @staticmethod
    def password_policy_violations(password: str) -> List[str]:
        password = password or ""
        violations = []
        if len(password) < PASSWORD_MIN_LENGTH:
            violations.append(f"must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(password) > PASSWORD_MAX_LENGTH:
            violations.append(f"must be at most {PASSWORD_MAX_LENGTH} characters")
        for pattern, rule in PASSWORD_RULES:
            if not pattern.search(password):
                violations.append(rule)
        return violations

    @classmethod
    def validate_password(cls, password: str) -> bool:
        return not cls.password_policy_violations(password)

    @staticmethod
    def sanitize_user(user: User) -> UserInfo:
        """Only place where a User crosses the service boundary"""
        return UserInfo(
            id=str(user.id),
            email=user.email,
            name=user.name,
            avatar=user.avatar,
            is_verified=bool(user.is_verified),
        )
