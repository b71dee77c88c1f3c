from __future__ import annotations

from fastapi import APIRouter, FastAPI

from clinicleads_api.api.routes import landing_pages


def include_api_routes(app: FastAPI) -> None:
    """Register all API routers with the FastAPI application."""

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(landing_pages.router)
    app.include_router(api_router)


__all__ = ["include_api_routes"]
