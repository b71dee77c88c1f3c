from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clinicleads_api.db.models import AiLandingPage
from clinicleads_api.domain.enums import QuizType


class LandingPageRepository:
    """Persistence layer for generated landing page documents."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_key(self, doctor_id: str, quiz_type: QuizType) -> list[AiLandingPage]:
        stmt: Select[tuple[AiLandingPage]] = (
            select(AiLandingPage)
            .where(
                AiLandingPage.doctor_id == doctor_id,
                AiLandingPage.quiz_type == quiz_type.value,
            )
            .order_by(AiLandingPage.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, record_id: int) -> AiLandingPage | None:
        stmt: Select[tuple[AiLandingPage]] = select(AiLandingPage).where(
            AiLandingPage.id == record_id
        ).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert(
        self,
        *,
        doctor_id: str,
        quiz_type: QuizType,
        content: dict[str, Any] | None,
        chatbot_colors: dict[str, Any] | None,
        now: datetime | None = None,
    ) -> AiLandingPage:
        timestamp = now or datetime.now(tz=timezone.utc)
        entity = AiLandingPage(
            doctor_id=doctor_id,
            quiz_type=quiz_type.value,
            content=content,
            chatbot_colors=chatbot_colors,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def update(
        self,
        record_id: int,
        *,
        content: dict[str, Any] | None = None,
        chatbot_colors: dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> None:
        values: dict[str, Any] = {"updated_at": now or datetime.now(tz=timezone.utc)}
        if content is not None:
            values["content"] = content
        if chatbot_colors is not None:
            values["chatbot_colors"] = chatbot_colors
        await self._session.execute(
            update(AiLandingPage).where(AiLandingPage.id == record_id).values(**values)
        )

    async def delete_ids(self, record_ids: Iterable[int]) -> int:
        ids = list(record_ids)
        if not ids:
            return 0
        result = await self._session.execute(
            delete(AiLandingPage).where(AiLandingPage.id.in_(ids))
        )
        return result.rowcount or 0

    async def delete_for_key(self, doctor_id: str, quiz_type: QuizType) -> int:
        result = await self._session.execute(
            delete(AiLandingPage).where(
                AiLandingPage.doctor_id == doctor_id,
                AiLandingPage.quiz_type == quiz_type.value,
            )
        )
        return result.rowcount or 0


__all__ = ["LandingPageRepository"]
