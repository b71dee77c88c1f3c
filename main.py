from __future__ import annotations

import sys
import time

import uvicorn
from pydantic import ValidationError

from clinicleads_api.config.settings import Settings, get_settings


def _run_migrations(max_attempts: int = 8, base_delay: float = 1.0) -> None:
    from asyncpg import PostgresError
    from sqlalchemy.exc import OperationalError

    from clinicleads_api.db.migrations import run_migrations

    attempt = 1
    while True:
        try:
            run_migrations()
            return
        except (OperationalError, PostgresError) as exc:
            if attempt >= max_attempts:
                raise
            wait = base_delay * attempt
            print(
                f"[main] Database not ready (attempt {attempt}/{max_attempts}): {exc}. "
                f"Retrying in {wait:.1f}s...",
                file=sys.stderr,
            )
            time.sleep(wait)
            attempt += 1


def _run_api(settings: Settings) -> None:
    reload_enabled = settings.environment == "local"
    if reload_enabled:
        app_target = "clinicleads_api.app:app"
    else:
        from clinicleads_api.app import app as app_target
    uvicorn.run(
        app_target,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=reload_enabled,
    )


def _bootstrap_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        missing = sorted(
            {
                ".".join(str(part) for part in error["loc"])
                for error in exc.errors()
                if error.get("type") == "missing"
            }
        )
        if missing:
            print(
                "[main] Missing required configuration. "
                "Set environment variables (prefix CLINICLEADS_) for: "
                f"{', '.join(missing)}",
                file=sys.stderr,
            )
        raise


def main() -> None:
    try:
        settings = _bootstrap_settings()
    except ValidationError:
        sys.exit(1)

    if not settings.openrouter_api_key:
        print(
            "[main] CLINICLEADS_OPENROUTER_API_KEY is not set; stored pages will be served "
            "but generation requests will return 503.",
            file=sys.stderr,
        )

    _run_migrations()
    _run_api(settings)


if __name__ == "__main__":
    main()
