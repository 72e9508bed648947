from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from .error import ClientError, ServerError, error_body
from .middleware import log_requests
from .utils.jwt import TokenCodec
from todo_auth.app.services.credential_hasher import CredentialHasher
from todo_auth.app.services.rate_limiter import RateLimiter
from todo_auth.domain.errors import AuthErrorCode
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    code, message = exc.base_error.code, exc.base_error.message
    logger.warning(f"Client error: {code} {message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(code, message))


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.warning(f"Request validation failed: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(AuthErrorCode.VALIDATION_ERROR.value, message),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal Server Error"),
    )


def create_app(ApplicationConfig) -> FastAPI:
    # Fails fast (ValueError) when AUTH_SECRET_KEY or JWT_SECRET is unusable
    credential_hasher = CredentialHasher(
        ApplicationConfig.AUTH_SECRET_KEY, rounds=ApplicationConfig.PASSWORD_HASH_ROUNDS
    )
    token_codec = TokenCodec(ApplicationConfig.JWT_SECRET, ApplicationConfig.APP_ENV)
    rate_limiter = RateLimiter(
        max_attempts=ApplicationConfig.RATE_LIMIT_MAX_ATTEMPTS,
        window_seconds=ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
    )
    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
    session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES_ON_STARTUP:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield
        await engine.dispose()

    app = FastAPI(title="Todo Auth API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.credential_hasher = credential_hasher
    app.state.token_codec = token_codec
    app.state.rate_limiter = rate_limiter
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from todo_auth.api.routes import auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info(f"Application created for environment '{ApplicationConfig.APP_ENV}'")
    return app
