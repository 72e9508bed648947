import os
import yaml

from todo_auth.domain import constants

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def get(key, default=None):
    """Environment variable first, then env.yaml, then default"""
    return os.environ.get(key, data.get(key, default))


def get_bool(key, default=False):
    value = get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def get_list(key, default=None):
    value = get(key, default or [])
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(value)


class ApplicationConfig:
    DB_URI = get("DB_URI", "sqlite+aiosqlite:///./todo_auth.db")
    CREATE_TABLES_ON_STARTUP = get_bool("CREATE_TABLES_ON_STARTUP", True)
    API_PORT = int(get("API_PORT", 8000))
    API_HOST = get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = get_list("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = get_bool("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = get_bool("ENABLE_LOGGING_MIDDLEWARE", True)
    # Deployment tag embedded in token headers: development, production or test
    APP_ENV = get("APP_ENV", "development")
    AUTH_SECRET_KEY = get("AUTH_SECRET_KEY", "dev-auth-secret-key-change-in-production")
    JWT_SECRET = get("JWT_SECRET", "dev-secret-key-change-in-production")
    PASSWORD_HASH_ROUNDS = int(get("PASSWORD_HASH_ROUNDS", constants.DEFAULT_KDF_ROUNDS))
    RATE_LIMIT_MAX_ATTEMPTS = int(
        get("RATE_LIMIT_MAX_ATTEMPTS", constants.RATE_LIMIT_MAX_ATTEMPTS)
    )
    RATE_LIMIT_WINDOW_SECONDS = int(
        get("RATE_LIMIT_WINDOW_SECONDS", constants.RATE_LIMIT_WINDOW.total_seconds())
    )
