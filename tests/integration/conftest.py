import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from todo_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from todo_auth.api.app import create_app
from todo_auth.depends import get_unit_of_work

TEST_DB_URI = "sqlite+aiosqlite:///./test.db"


class TestConfig(ApplicationConfig):
    DB_URI = TEST_DB_URI
    APP_ENV = "test"
    CREATE_TABLES_ON_STARTUP = False
    ENABLE_LOGGING_MIDDLEWARE = False
    AUTH_SECRET_KEY = "integration-auth-secret-key-0123456789abcdef"
    JWT_SECRET = "integration-jwt-secret"
    PASSWORD_HASH_ROUNDS = 1
    RATE_LIMIT_MAX_ATTEMPTS = 10
    RATE_LIMIT_WINDOW_SECONDS = 15 * 60


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session):
    app = create_app(TestConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
