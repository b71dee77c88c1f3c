from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinicleads_api.db.models import DoctorProfileRecord


class DoctorProfileRepository:
    """Read access to clinician profiles."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, doctor_id: str) -> DoctorProfileRecord | None:
        stmt: Select[tuple[DoctorProfileRecord]] = select(DoctorProfileRecord).where(
            DoctorProfileRecord.id == doctor_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()


__all__ = ["DoctorProfileRepository"]
