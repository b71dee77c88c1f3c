"""Alembic upgrade plus a metadata bootstrap for databases Alembic has never touched."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from clinicleads_api.config.settings import get_settings

PROJECT_ROOT = Path(__file__).resolve().parents[3]
ALEMBIC_CONFIG_ENV = "CLINICLEADS_ALEMBIC_CONFIG"
SKIP_MIGRATIONS_ENV = "CLINICLEADS_SKIP_MIGRATIONS"
BASELINE_REVISION = "0001_landing_pages"

_alembic_version = sa.Table(
    "alembic_version",
    sa.MetaData(),
    sa.Column("version_num", sa.String(32), primary_key=True),
)


def migrations_skipped() -> bool:
    return os.environ.get(SKIP_MIGRATIONS_ENV, "").lower() in {"1", "true", "yes"}


def alembic_config(database_url: str) -> Config:
    """Load alembic.ini from the project root, or from CLINICLEADS_ALEMBIC_CONFIG."""
    cfg_path = Path(os.environ.get(ALEMBIC_CONFIG_ENV) or PROJECT_ROOT / "alembic.ini")
    if not cfg_path.is_file():
        raise RuntimeError(
            f"Alembic config not found at {cfg_path}; set {ALEMBIC_CONFIG_ENV} to its location."
        )
    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(cfg_path.parent / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)
    return config


def run_migrations(target_revision: str = "head") -> None:
    if migrations_skipped():
        return

    database_url = get_settings().database_url
    config = alembic_config(database_url)
    print(f"[migrations] Upgrading landing page schema to {target_revision}")
    command.upgrade(config, target_revision)
    ensure_schema_created(database_url)


async def _stamped_revision(engine: AsyncEngine) -> str | None:
    try:
        async with engine.connect() as conn:
            result = await conn.execute(sa.select(_alembic_version.c.version_num).limit(1))
            return result.scalar_one_or_none()
    except SQLAlchemyError:
        return None


async def _bootstrap(database_url: str) -> bool:
    from clinicleads_api.db import Base

    engine = create_async_engine(database_url)
    try:
        if await _stamped_revision(engine) is not None:
            return False

        print(f"[migrations] No Alembic revision found; creating tables at {BASELINE_REVISION}")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(_alembic_version.create, checkfirst=True)
            await conn.execute(sa.delete(_alembic_version))
            await conn.execute(sa.insert(_alembic_version).values(version_num=BASELINE_REVISION))
        return True
    finally:
        await engine.dispose()


def ensure_schema_created(database_url: str | None = None) -> bool:
    """Create the tables and stamp the baseline when no revision is recorded.

    Returns True when the schema was created here.
    """
    return asyncio.run(_bootstrap(database_url or get_settings().database_url))


if __name__ == "__main__":  # pragma: no cover
    run_migrations()
