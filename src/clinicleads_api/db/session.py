from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Callable

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from clinicleads_api.config.settings import Settings, get_settings

EngineFactory = Callable[[Settings], AsyncEngine]

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_engine_factory: EngineFactory | None = None


def configure_engine_factory(factory: EngineFactory | None) -> None:
    """Swap the engine factory (tests) and drop any engine built by the previous one."""

    global _engine_factory, _engine, _sessionmaker
    _engine_factory = factory
    _engine = None
    _sessionmaker = None


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the process-wide async engine, creating it on first use."""

    global _engine, _sessionmaker

    if _engine is not None:
        return _engine

    settings = settings or get_settings()
    factory = _engine_factory or create_engine_for
    _engine = factory(settings)
    _sessionmaker = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


def create_engine_for(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    options: dict[str, Any] = {"echo": settings.db_echo}
    if url.get_backend_name() == "sqlite":
        # SQLite uses a static pool per file; sizing options are rejected.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
        options["pool_pre_ping"] = True
    return create_async_engine(url, **options)


def get_sessionmaker(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    global _sessionmaker
    if _sessionmaker is None:
        get_engine(settings)
        assert _sessionmaker is not None  # For type-checkers
    return _sessionmaker


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a database session."""

    session_factory = get_sessionmaker()
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def lifespan_context() -> AsyncIterator[None]:
    """Dispose the engine when the FastAPI lifespan ends."""

    global _engine, _sessionmaker
    try:
        yield
    finally:
        if _engine is not None:
            await _engine.dispose()
        _engine = None
        _sessionmaker = None


__all__ = [
    "configure_engine_factory",
    "create_engine_for",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "lifespan_context",
]
