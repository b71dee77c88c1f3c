from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clinicleads_api.db.models import AiLandingPage
from clinicleads_api.db.repositories.landing_pages import LandingPageRepository
from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.quizzes import get_quiz_profile
from clinicleads_api.domain.schemas.content import (
    ChatbotColors,
    CompactionResult,
    ContentRecordRead,
    GeneratedContent,
)
from clinicleads_api.services.ai.extraction import is_error_payload

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _aware(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _recency(record: AiLandingPage) -> tuple[datetime, int]:
    return (_aware(record.updated_at or record.created_at), record.id)


def select_canonical(records: Sequence[AiLandingPage]) -> AiLandingPage | None:
    """Most recently updated row wins; `created_at` stands in for a missing `updated_at`."""
    if not records:
        return None
    return max(records, key=_recency)


def _has_value(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return len(value) > 0
    return False


class ContentStore:
    """Read and write generated landing pages keyed by doctor and quiz type."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._repository = LandingPageRepository(session)

    async def compact(self, doctor_id: str, quiz_type: QuizType) -> CompactionResult:
        """Keep the canonical row for the key and delete every other one."""
        records = await self._repository.list_for_key(doctor_id, quiz_type)
        canonical = select_canonical(records)
        result = CompactionResult(
            doctor_id=doctor_id,
            quiz_type=quiz_type,
            canonical_id=canonical.id if canonical else None,
            examined=len(records),
        )
        if canonical is None or len(records) == 1:
            return result

        duplicate_ids = [record.id for record in records if record.id != canonical.id]
        try:
            deleted = await self._repository.delete_ids(duplicate_ids)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error(
                "Failed to delete duplicate landing pages",
                extra={
                    "doctor_id": doctor_id,
                    "quiz_type": quiz_type.value,
                    "canonical_id": canonical.id,
                    "duplicate_ids": duplicate_ids,
                    "error": str(exc),
                },
            )
            return result.model_copy(update={"failed": True})

        logger.info(
            "Compacted duplicate landing pages",
            extra={
                "doctor_id": doctor_id,
                "quiz_type": quiz_type.value,
                "canonical_id": canonical.id,
                "deleted": deleted,
            },
        )
        return result.model_copy(update={"deleted": deleted})

    async def fetch(self, doctor_id: str, quiz_type: QuizType) -> ContentRecordRead | None:
        result = await self.compact(doctor_id, quiz_type)
        if result.canonical_id is None:
            return None
        entity = await self._repository.get(result.canonical_id)
        if entity is None:
            return None
        return ContentRecordRead.model_validate(entity)

    async def upsert(
        self,
        doctor_id: str,
        quiz_type: QuizType,
        content: GeneratedContent | None,
        colors: ChatbotColors | None = None,
    ) -> ContentRecordRead:
        """Update the canonical row for the key, or insert one when none exists.

        Concurrent writers are not coordinated; whichever commits last wins.
        """
        canonical = select_canonical(await self._repository.list_for_key(doctor_id, quiz_type))
        if canonical is None:
            entity = await self._repository.insert(
                doctor_id=doctor_id,
                quiz_type=quiz_type,
                content=content,
                chatbot_colors=(colors or ChatbotColors()).as_record(),
            )
            record_id = entity.id
        else:
            record_id = canonical.id
            await self._repository.update(
                record_id,
                content=content,
                chatbot_colors=colors.as_record() if colors else None,
            )
        await self._session.commit()

        entity = await self._repository.get(record_id)
        if entity is None:
            raise LookupError(f"Landing page {record_id} was removed while saving.")
        return ContentRecordRead.model_validate(entity)

    async def delete(self, doctor_id: str, quiz_type: QuizType) -> int:
        deleted = await self._repository.delete_for_key(doctor_id, quiz_type)
        await self._session.commit()
        logger.info(
            "Deleted landing pages",
            extra={"doctor_id": doctor_id, "quiz_type": quiz_type.value, "deleted": deleted},
        )
        return deleted

    async def get_colors(self, doctor_id: str, quiz_type: QuizType) -> ChatbotColors:
        record = await self.fetch(doctor_id, quiz_type)
        return colors_from_record(record.chatbot_colors if record else None)

    async def set_colors(
        self, doctor_id: str, quiz_type: QuizType, colors: ChatbotColors
    ) -> ChatbotColors:
        canonical = select_canonical(await self._repository.list_for_key(doctor_id, quiz_type))
        if canonical is None:
            await self._repository.insert(
                doctor_id=doctor_id,
                quiz_type=quiz_type,
                content=None,
                chatbot_colors=colors.as_record(),
            )
        else:
            await self._repository.update(canonical.id, chatbot_colors=colors.as_record())
        await self._session.commit()
        return colors

    @staticmethod
    def is_usable(record: ContentRecordRead | None, quiz_type: QuizType) -> bool:
        """A stored record counts only if its content satisfies the quiz's required fields."""
        if record is None or record.content is None:
            return False
        return is_usable_content(record.content, quiz_type)


def is_usable_content(content: Mapping[str, Any], quiz_type: QuizType) -> bool:
    if is_error_payload(content):
        return False
    profile = get_quiz_profile(quiz_type)
    return all(_has_value(content.get(field)) for field in profile.required_fields)


def colors_from_record(stored: Mapping[str, Any] | None) -> ChatbotColors:
    if not stored:
        return ChatbotColors()
    try:
        return ChatbotColors.model_validate(stored)
    except ValidationError:
        logger.warning("Ignoring malformed chatbot colors", extra={"colors": dict(stored)})
        return ChatbotColors()


__all__ = [
    "ContentStore",
    "colors_from_record",
    "is_usable_content",
    "select_canonical",
]
