from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status as http_status

from clinicleads_api.api import include_api_routes
from clinicleads_api.config.settings import Settings, get_settings
from clinicleads_api.core.logging import configure_logging
from clinicleads_api.db.session import lifespan_context
from clinicleads_api.domain.schemas.common import ErrorBody, ErrorEnvelope
from clinicleads_api.services.landing_pages import GenerationRegistry

logger = logging.getLogger(__name__)


def _status_message(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    payload = ErrorEnvelope(
        error=ErrorBody(code=status_code, message=message, details=details)
    ).model_dump(mode="json")
    return JSONResponse(status_code=status_code, content=payload)


@asynccontextmanager
async def _lifespan(_: FastAPI):
    async with lifespan_context():
        yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory for the ClinicLeads landing page API."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        lifespan=_lifespan,
    )
    app.state.generation_registry = GenerationRegistry()

    if settings.environment == "production" and (
        not settings.cors_origins or settings.cors_origins == ["*"]
    ):
        raise RuntimeError("Production deployments must configure explicit CORS origins.")

    if settings.cors_origins:
        from fastapi.middleware.cors import CORSMiddleware

        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    include_api_routes(app)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else _status_message(exc.status_code)
        details = exc.detail if isinstance(exc.detail, dict) else None
        return _error_response(exc.status_code, message, details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            http_status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Request validation failed",
            {"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:  # pragma: no cover
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return _error_response(
            http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            {"reason": str(exc)},
        )

    return app


app = create_app()


__all__ = ["app", "create_app"]
