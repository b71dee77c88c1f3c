from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal

from sqlalchemy.exc import SQLAlchemyError

from clinicleads_api.domain.enums import GenerationState, QuizType
from clinicleads_api.domain.schemas.content import (
    ChatbotColors,
    ContentRecordRead,
    GeneratedContent,
    LandingPageView,
)
from clinicleads_api.domain.schemas.doctors import DoctorProfile
from clinicleads_api.services.ai.generation_service import LandingPageGenerator
from clinicleads_api.services.landing_pages.editing import EditableSection
from clinicleads_api.services.landing_pages.registry import PageGenerationState
from clinicleads_api.services.landing_pages.rendering import render_landing_page
from clinicleads_api.services.landing_pages.store import ContentStore, colors_from_record

logger = logging.getLogger(__name__)

Source = Literal["stored", "generated", "none"]

_RENDERED_FIELDS = {
    "headline": "headline",
    "intro": "intro",
    "symptoms": "symptoms",
    "treatments": "treatments",
    "treatmentOptions": "treatment_options",
    "comparisonTable": "comparison_table",
    "whyChoose": "why_choose",
    "testimonials": "testimonials",
    "locations": "locations",
    "contact": "contact",
    "cta": "cta",
}


class GenerationNotConfiguredError(RuntimeError):
    """Raised when a page must be generated but no completion client is available."""


class LandingPageNotFoundError(LookupError):
    """Raised when an operation needs page content and none is loaded."""


class LandingPageSession:
    """Per-request view of one doctor and quiz type.

    The attempt counter and locks live in a `PageGenerationState` shared by every
    session for the same page: a load runs at most once per attempt, concurrent loads
    wait for each other, and a result is applied or stored only while its attempt is
    still the latest one.
    """

    def __init__(
        self,
        *,
        doctor: DoctorProfile,
        quiz_type: QuizType,
        store: ContentStore,
        generator: LandingPageGenerator | None = None,
        expose_debug: bool = False,
        shared: PageGenerationState | None = None,
    ) -> None:
        self.doctor = doctor
        self.quiz_type = quiz_type
        self._store = store
        self._generator = generator
        self._expose_debug = expose_debug
        self._shared = shared or PageGenerationState()

        self.state = GenerationState.NOT_STARTED
        self._state_attempt: int | None = None

        self._content: GeneratedContent | None = None
        self._source: Source = "none"
        self._colors = ChatbotColors()
        self._error: str | None = None
        self._raw: str | None = None
        self._persisted = False
        self._updated_at: datetime | None = None
        self._edit: EditableSection | None = None

    @property
    def attempt(self) -> int:
        return self._shared.attempt

    @property
    def content(self) -> GeneratedContent | None:
        return self._content

    @property
    def editing(self) -> EditableSection | None:
        return self._edit

    async def load(self, *, allow_generation: bool = True) -> LandingPageView:
        """Show the stored page, generating one when nothing usable is stored."""
        if self._state_attempt == self.attempt and self.state is not GenerationState.NOT_STARTED:
            return self.view()
        async with self._shared.load_lock:
            return await self._run(
                self.attempt, use_cache=True, allow_generation=allow_generation
            )

    async def retry(self) -> LandingPageView:
        """Start a fresh attempt that regenerates regardless of what is stored."""
        attempt = self._shared.next_attempt()
        return await self._run(attempt, use_cache=False, allow_generation=True)

    async def _run(
        self, attempt: int, *, use_cache: bool, allow_generation: bool
    ) -> LandingPageView:
        self.state = GenerationState.IN_FLIGHT
        self._state_attempt = attempt

        record = await self._safe_fetch()
        colors = colors_from_record(record.chatbot_colors) if record is not None else None

        stored = self._usable_content(record) if use_cache else None
        if stored is not None and record is not None:
            self._apply(
                attempt,
                content=stored,
                source="stored",
                colors=colors,
                persisted=True,
                updated_at=record.updated_at or record.created_at,
            )
            return self.view()

        if not allow_generation:
            self._apply(attempt, content=None, source="none", colors=colors)
            return self.view()

        if self._generator is None:
            self.state = GenerationState.NOT_STARTED
            self._state_attempt = None
            raise GenerationNotConfiguredError("Landing page generation is not configured.")

        outcome = await self._generator.generate(self.doctor, self.quiz_type)
        document: GeneratedContent | None = None
        saved: ContentRecordRead | None = None
        async with self._shared.save_lock:
            current = attempt == self.attempt
            if current and not outcome.failed:
                document = {
                    **outcome.content,
                    "doctor_profile": self.doctor.model_dump(mode="json"),
                }
                saved = await self._safe_upsert(document)

        if not current:
            logger.info(
                "Discarding stale generation result",
                extra={
                    "doctor_id": self.doctor.id,
                    "quiz_type": self.quiz_type.value,
                    "attempt": attempt,
                    "current_attempt": self.attempt,
                },
            )
            await self._show_latest_stored()
            return self.view()

        if document is None:
            self._apply(
                attempt,
                content=None,
                source="none",
                colors=colors,
                error=outcome.error,
                raw=outcome.raw,
            )
            return self.view()

        self._apply(
            attempt,
            content=document,
            source="generated",
            colors=colors_from_record(saved.chatbot_colors) if saved else colors,
            persisted=saved is not None,
            updated_at=saved.updated_at if saved else None,
        )
        return self.view()

    async def _show_latest_stored(self) -> None:
        """After a stale result, show whatever the newer attempt has stored, if anything."""
        if self._state_attempt == self.attempt and self.state is GenerationState.DONE:
            return
        attempt = self.attempt
        record = await self._safe_fetch()
        stored = self._usable_content(record)
        if stored is None or record is None:
            return
        self._apply(
            attempt,
            content=stored,
            source="stored",
            colors=colors_from_record(record.chatbot_colors),
            persisted=True,
            updated_at=record.updated_at or record.created_at,
        )

    def _usable_content(self, record: ContentRecordRead | None) -> GeneratedContent | None:
        if record is None or not ContentStore.is_usable(record, self.quiz_type):
            return None
        return record.content

    def _apply(
        self,
        attempt: int,
        *,
        content: GeneratedContent | None,
        source: Source,
        colors: ChatbotColors | None = None,
        persisted: bool = False,
        updated_at: datetime | None = None,
        error: str | None = None,
        raw: str | None = None,
    ) -> None:
        if attempt != self.attempt:
            return
        if colors is not None:
            self._colors = colors
        self._content = content
        self._source = source
        self._persisted = persisted
        self._updated_at = updated_at
        self._error = error
        self._raw = raw
        self._edit = None
        self.state = GenerationState.DONE
        self._state_attempt = attempt

    async def _safe_fetch(self) -> ContentRecordRead | None:
        try:
            return await self._store.fetch(self.doctor.id, self.quiz_type)
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to read stored landing page",
                extra={
                    "doctor_id": self.doctor.id,
                    "quiz_type": self.quiz_type.value,
                    "error": str(exc),
                },
            )
            return None

    async def _safe_upsert(self, document: GeneratedContent) -> ContentRecordRead | None:
        try:
            return await self._store.upsert(self.doctor.id, self.quiz_type, document)
        except (SQLAlchemyError, LookupError) as exc:
            logger.error(
                "Failed to save landing page",
                extra={
                    "doctor_id": self.doctor.id,
                    "quiz_type": self.quiz_type.value,
                    "error": str(exc),
                },
            )
            return None

    def begin_edit(self, section: str) -> EditableSection:
        """Open an edit buffer seeded with the section's displayed value."""
        if self._content is None:
            raise LandingPageNotFoundError("No landing page content to edit.")
        self._edit = EditableSection.open(
            self.quiz_type,
            section,
            self._content.get(section),
            default=self._rendered_value(section),
        )
        return self._edit

    def update_edit(self, value: Any) -> EditableSection:
        if self._edit is None:
            raise LandingPageNotFoundError("No section is being edited.")
        self._edit.value = value
        return self._edit

    def cancel_edit(self) -> None:
        self._edit = None

    async def save_edit(self) -> LandingPageView:
        """Write the edited section into the document and persist the whole document.

        The edited document is shown even when the write fails.
        """
        if self._edit is None or self._content is None:
            raise LandingPageNotFoundError("No section is being edited.")
        value = self._edit.validated()
        document: GeneratedContent = {**self._content, self._edit.section: value}
        self._content = document
        self._edit = None

        async with self._shared.save_lock:
            saved = await self._safe_upsert(document)
        self._persisted = saved is not None
        if saved is not None:
            self._updated_at = saved.updated_at
            logger.info(
                "Saved landing page section",
                extra={"doctor_id": self.doctor.id, "quiz_type": self.quiz_type.value},
            )
        return self.view()

    def _rendered_value(self, section: str) -> Any:
        rendered = render_landing_page(self._content, self.doctor, self.quiz_type)
        field = _RENDERED_FIELDS.get(section)
        if field is not None:
            value = getattr(rendered, field)
        elif section in rendered.overviews:
            value = rendered.overviews[section]
        else:
            value = rendered.explainer
        if isinstance(value, list):
            return [item.model_dump() if hasattr(item, "model_dump") else item for item in value]
        return value

    def view(self) -> LandingPageView:
        rendered = (
            render_landing_page(self._content, self.doctor, self.quiz_type)
            if self._content is not None
            else None
        )
        return LandingPageView(
            doctor=self.doctor,
            quiz_type=self.quiz_type,
            state=self.state,
            attempt=self.attempt,
            source=self._source,
            content=rendered,
            colors=self._colors,
            error=self._error,
            raw=self._raw if self._expose_debug else None,
            retry_available=self._error is not None,
            persisted=self._persisted,
            updated_at=self._updated_at,
        )


__all__ = [
    "GenerationNotConfiguredError",
    "LandingPageNotFoundError",
    "LandingPageSession",
]
