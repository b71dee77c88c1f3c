from __future__ import annotations

from typing import Any

from clinicleads_api.domain.schemas.base import BaseSchema


class ErrorBody(BaseSchema):
    code: int
    message: str
    details: dict[str, Any] | None = None


class ErrorEnvelope(BaseSchema):
    error: ErrorBody


__all__ = ["ErrorBody", "ErrorEnvelope"]
