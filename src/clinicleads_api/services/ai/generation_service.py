from __future__ import annotations

import logging
from dataclasses import dataclass

from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.schemas.content import GENERATION_ERROR_MESSAGE
from clinicleads_api.domain.schemas.doctors import DoctorProfile
from clinicleads_api.services.ai.clients import ChatClientError, ChatCompletionClient, JSONObject
from clinicleads_api.services.ai.extraction import extract_content, is_error_payload
from clinicleads_api.services.ai.prompts import build_landing_page_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationOutcome:
    """Result of one generation attempt; failures are carried as an error payload."""

    content: JSONObject
    raw: str | None = None

    @property
    def failed(self) -> bool:
        return is_error_payload(self.content)

    @property
    def error(self) -> str | None:
        if not self.failed:
            return None
        message = self.content.get("error")
        return message if isinstance(message, str) else GENERATION_ERROR_MESSAGE


class LandingPageGenerator:
    """Compose prompt building, completion, and extraction into one call."""

    def __init__(self, client: ChatCompletionClient) -> None:
        self._client = client

    async def generate(self, doctor: DoctorProfile, quiz_type: QuizType) -> GenerationOutcome:
        prompt = build_landing_page_prompt(doctor, quiz_type)
        try:
            raw = await self._client.complete(prompt)
        except ChatClientError as exc:
            logger.warning(
                "Landing page generation failed",
                extra={
                    "doctor_id": doctor.id,
                    "quiz_type": quiz_type.value,
                    "model": self._client.default_model,
                    "error": str(exc),
                },
            )
            return GenerationOutcome(content={"error": GENERATION_ERROR_MESSAGE})

        content = extract_content(raw)
        if is_error_payload(content):
            logger.warning(
                "Completion text could not be parsed",
                extra={
                    "doctor_id": doctor.id,
                    "quiz_type": quiz_type.value,
                    "raw_length": len(raw),
                },
            )
        else:
            logger.info(
                "Generated landing page content",
                extra={
                    "doctor_id": doctor.id,
                    "quiz_type": quiz_type.value,
                    "keys": sorted(content),
                },
            )
        return GenerationOutcome(content=content, raw=raw)


__all__ = ["GenerationOutcome", "LandingPageGenerator"]
