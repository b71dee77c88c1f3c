from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, TypeAlias

from pydantic import Field

from clinicleads_api.domain.enums import GenerationState, QuizType
from clinicleads_api.domain.schemas.base import BaseSchema, TimestampedSchema
from clinicleads_api.domain.schemas.doctors import DoctorProfile, Location, Testimonial

# Persisted landing page documents are kept as the JSON object the model produced;
# unknown keys survive and no field is guaranteed to be present or well typed.
GeneratedContent: TypeAlias = dict[str, Any]

ComparisonRow = Annotated[list[str], Field(min_length=4, max_length=4)]

EXTRACTION_ERROR_MESSAGE = "Failed to parse AI response"
GENERATION_ERROR_MESSAGE = "Failed to generate content. Please try again."


class ChatbotColors(BaseSchema):
    primary: str = "#2563eb"
    background: str = "#ffffff"
    text: str = "#ffffff"
    user_bubble: str = Field("#2563eb", alias="userBubble")
    bot_bubble: str = Field("#f1f5f9", alias="botBubble")
    user_text: str = Field("#ffffff", alias="userText")
    bot_text: str = Field("#334155", alias="botText")

    def as_record(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class ContentRecordRead(TimestampedSchema):
    id: int
    doctor_id: str
    quiz_type: QuizType
    content: GeneratedContent | None = None
    chatbot_colors: dict[str, Any] | None = None


class CompactionResult(BaseSchema):
    doctor_id: str
    quiz_type: QuizType
    canonical_id: int | None = Field(None, description="Surviving record, if any.")
    examined: int = Field(0, ge=0)
    deleted: int = Field(0, ge=0)
    failed: bool = Field(False, description="Duplicate deletion raised and was skipped.")


class RenderedContent(BaseSchema):
    """Landing page copy after render-time fallbacks were applied."""

    headline: str
    intro: str
    explainer: str
    symptoms: list[str]
    treatments: str
    treatment_options: list[str]
    comparison_table: list[ComparisonRow]
    overviews: dict[str, str]
    why_choose: list[str]
    testimonials: list[Testimonial]
    locations: list[Location]
    contact: str
    cta: str


class LandingPageView(BaseSchema):
    doctor: DoctorProfile
    quiz_type: QuizType
    state: GenerationState
    attempt: int = Field(0, ge=0)
    source: Literal["stored", "generated", "none"] = "none"
    content: RenderedContent | None = None
    colors: ChatbotColors = Field(default_factory=ChatbotColors)
    error: str | None = None
    raw: str | None = Field(None, description="Raw completion; only exposed in debug mode.")
    retry_available: bool = False
    persisted: bool = Field(False, description="Whether the shown document is stored.")
    updated_at: datetime | None = None


class SectionUpdate(BaseSchema):
    value: Any = Field(..., description="New value shaped for the section's kind.")


__all__ = [
    "ChatbotColors",
    "ComparisonRow",
    "CompactionResult",
    "ContentRecordRead",
    "EXTRACTION_ERROR_MESSAGE",
    "GENERATION_ERROR_MESSAGE",
    "GeneratedContent",
    "LandingPageView",
    "RenderedContent",
    "SectionUpdate",
]
