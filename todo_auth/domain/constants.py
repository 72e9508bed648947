from datetime import timedelta

# Issuer and audience of every bearer token
APP_NAME = "modern-full-stack-starter-template"

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
AUTH_SECRET_MIN_LENGTH = 32

SALT_BYTES = 32
KEY_BYTES = 64
SESSION_TOKEN_BYTES = 64
# Rounds for new hashes; each hash stores the rounds it was made with
DEFAULT_KDF_ROUNDS = 100
# bcrypt_pbkdf rounds below this are considered weak by the bcrypt package
RECOMMENDED_KDF_ROUNDS = 50

SESSION_EXPIRY_DEFAULT = timedelta(hours=24)
SESSION_EXPIRY_REMEMBER_ME = timedelta(days=30)

TOKEN_ALGORITHM = "HS256"
TOKEN_EXPIRY = timedelta(days=7)

RATE_LIMIT_MAX_ATTEMPTS = 10
RATE_LIMIT_WINDOW = timedelta(minutes=15)

SESSION_COOKIE_NAME = "session_token"
