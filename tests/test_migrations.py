from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from clinicleads_api.config.settings import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _fetch_version_sync(db_file: Path) -> str | None:
    with sqlite3.connect(db_file) as conn:
        cursor = conn.execute("SELECT version_num FROM alembic_version")
        row = cursor.fetchone()
        return row[0] if row else None


def _table_names(db_file: Path) -> list[str]:
    with sqlite3.connect(db_file) as conn:
        cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        return [row[0] for row in cursor.fetchall()]


def _build_db_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


def test_ensure_schema_created_bootstraps_when_missing(tmp_path, monkeypatch) -> None:
    db_path = tmp_path / "bootstrap.sqlite"
    monkeypatch.setenv("CLINICLEADS_DATABASE_URL", _build_db_url(db_path))

    from clinicleads_api.db.migrations import BASELINE_REVISION, ensure_schema_created

    assert ensure_schema_created() is True

    tables = _table_names(db_path)
    assert {"alembic_version", "ai_landing_pages", "doctor_profiles"} <= set(tables)
    assert _fetch_version_sync(db_path) == BASELINE_REVISION


def test_ensure_schema_created_skips_when_version_present(tmp_path, monkeypatch) -> None:
    db_path = tmp_path / "bootstrap.sqlite"
    monkeypatch.setenv("CLINICLEADS_DATABASE_URL", _build_db_url(db_path))

    from clinicleads_api.db import Base
    from clinicleads_api.db.migrations import BASELINE_REVISION, ensure_schema_created

    assert ensure_schema_created() is True

    called_flag: dict[str, bool] = {"called": False}

    def _fail_create_all(*args, **kwargs) -> None:
        called_flag["called"] = True
        raise AssertionError("create_all should not run when alembic_version exists")

    monkeypatch.setattr(Base.metadata, "create_all", _fail_create_all)

    assert ensure_schema_created() is False

    assert called_flag["called"] is False
    assert _fetch_version_sync(db_path) == BASELINE_REVISION


def test_run_migrations_honours_skip_flag(monkeypatch) -> None:
    from clinicleads_api.db import migrations

    monkeypatch.setenv("CLINICLEADS_SKIP_MIGRATIONS", "1")
    monkeypatch.setattr(
        migrations.command,
        "upgrade",
        lambda *args, **kwargs: pytest.fail("upgrade should not run"),
    )

    migrations.run_migrations()


def test_alembic_config_points_at_project_scripts(monkeypatch) -> None:
    from clinicleads_api.db.migrations import PROJECT_ROOT, alembic_config

    monkeypatch.delenv("CLINICLEADS_ALEMBIC_CONFIG", raising=False)

    config = alembic_config("sqlite+aiosqlite:///./landing.db")

    assert config.get_main_option("script_location") == str(PROJECT_ROOT / "alembic")
    assert config.get_main_option("sqlalchemy.url") == "sqlite+aiosqlite:///./landing.db"


def test_alembic_config_reports_missing_file(tmp_path, monkeypatch) -> None:
    from clinicleads_api.db.migrations import alembic_config

    monkeypatch.setenv("CLINICLEADS_ALEMBIC_CONFIG", str(tmp_path / "missing.ini"))

    with pytest.raises(RuntimeError, match="CLINICLEADS_ALEMBIC_CONFIG"):
        alembic_config("sqlite+aiosqlite:///./landing.db")
