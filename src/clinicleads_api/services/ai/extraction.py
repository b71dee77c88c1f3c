"""Recover a JSON object from free-form completion text."""

from __future__ import annotations

import json
from typing import Any, Mapping

from clinicleads_api.domain.schemas.content import EXTRACTION_ERROR_MESSAGE
from clinicleads_api.services.ai.clients import JSONObject


def _loads_object(text: str) -> JSONObject | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_content(raw: str) -> JSONObject:
    """Parse the whole text, then the outermost brace span, else return an error payload.

    Nothing beyond those two attempts is tried: no fence stripping, no trailing-comma
    repair, no type coercion.
    """
    parsed = _loads_object(raw)
    if parsed is not None:
        return parsed

    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        parsed = _loads_object(raw[start : end + 1])
        if parsed is not None:
            return parsed

    return {"error": EXTRACTION_ERROR_MESSAGE, "raw": raw}


def is_error_payload(payload: Mapping[str, Any] | None) -> bool:
    return isinstance(payload, Mapping) and "error" in payload


__all__ = ["extract_content", "is_error_payload"]
