from __future__ import annotations

# ruff: noqa: E402
import os
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

os.environ.setdefault("CLINICLEADS_DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("CLINICLEADS_SKIP_MIGRATIONS", "1")
os.environ.setdefault("CLINICLEADS_ENVIRONMENT", "test")

from clinicleads_api.api.dependencies import get_chat_client
from clinicleads_api.app import create_app
from clinicleads_api.config.settings import Settings, get_settings
from clinicleads_api.db import Base, DoctorProfileRecord
from clinicleads_api.db.session import configure_engine_factory, get_session
from tests.utils import DOCTOR_ID, FakeChatClient

get_settings.cache_clear()


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture()
def settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        environment="test",
        log_level="INFO",
        openrouter_api_key="test-openrouter-key",
    )


@pytest_asyncio.fixture()
async def engine(database_url: str) -> AsyncIterator[AsyncEngine]:
    def _engine_factory(_settings: Settings) -> AsyncEngine:
        return create_async_engine(database_url, connect_args={"check_same_thread": False})

    configure_engine_factory(_engine_factory)
    engine = _engine_factory(Settings(database_url=database_url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()
    configure_engine_factory(None)


@pytest.fixture()
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture()
async def doctor_record(session_maker: async_sessionmaker[AsyncSession]) -> DoctorProfileRecord:
    record = DoctorProfileRecord(
        id=DOCTOR_ID,
        first_name="Jane",
        last_name="Smith",
        specialty="MD, FACS",
        clinic_name="6801 Oakmont Blvd",
        location="Fort Worth",
        phone="(817) 332-8848",
        website="https://example.com",
    )
    async with session_maker() as session:
        session.add(record)
        await session.commit()
    return record


@pytest.fixture()
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture()
def app(settings: Settings, session_maker, chat_client: FakeChatClient):
    application = create_app(settings)

    async def _get_session_override():
        async with session_maker() as session:
            yield session

    async def _get_chat_client_override():
        yield chat_client

    application.dependency_overrides[get_session] = _get_session_override
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_chat_client] = _get_chat_client_override
    return application


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with (
        LifespanManager(app),
        AsyncClient(transport=transport, base_url="http://test") as async_client,
    ):
        yield async_client
