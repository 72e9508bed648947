"""
Authentication error taxonomy

AuthErrorCode is the closed set of codes carried by Error.code in auth results.
Messages are shared so that distinct failure paths stay indistinguishable where
required (unknown email vs. wrong password).
"""

from enum import Enum


class AuthErrorCode(str, Enum):
    """Error kinds produced by the authentication core"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    RATE_LIMITED = "RATE_LIMITED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"


class AuthMessages:
    INVALID_EMAIL = "Invalid email format"
    PASSWORD_MISMATCH = "Passwords do not match"
    INVALID_CREDENTIALS = "Invalid email or password"
    EMAIL_EXISTS = "Email already registered"
    WEAK_PASSWORD = "Password does not meet security requirements"
    SESSION_EXPIRED = "Session has expired"
    RATE_LIMIT = "Too many attempts. Please try again later"
    UNAUTHORIZED = "Unauthorized"
    UNAUTHORIZED_ACCESS = "Unauthorized access"
    AUTHENTICATION_REQUIRED = "Authentication required"


class TokenError(Exception):
    """Raised by the token codec when a bearer token cannot be trusted"""


class DuplicateEmailError(Exception):
    """Raised by the user store when an insert hits the unique email constraint"""
