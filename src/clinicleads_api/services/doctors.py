from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from clinicleads_api.db.models import DoctorProfileRecord
from clinicleads_api.db.repositories.doctors import DoctorProfileRepository
from clinicleads_api.domain.schemas.doctors import DoctorProfile, Location

DEFAULT_CREDENTIALS = "MD"
DEFAULT_CITY = "Main Office"
ADDRESS_PLACEHOLDER = "Please contact for address"
PHONE_PLACEHOLDER = "Please contact for phone"


class DoctorNotFoundError(LookupError):
    """Raised when no clinician profile exists for the requested identifier."""


class DoctorProfileService:
    """Expose clinician profiles in the shape the landing page pipeline reads."""

    def __init__(self, session: AsyncSession, *, default_website: str = ""):
        self._repository = DoctorProfileRepository(session)
        self._default_website = default_website

    async def get_profile(self, doctor_id: str) -> DoctorProfile:
        record = await self._repository.get(doctor_id)
        if record is None:
            raise DoctorNotFoundError(f"Doctor {doctor_id} not found")
        return to_doctor_profile(record, default_website=self._default_website)


def to_doctor_profile(record: DoctorProfileRecord, *, default_website: str = "") -> DoctorProfile:
    """Map a stored profile row, substituting placeholders for missing facts."""
    name = " ".join(part for part in (record.first_name, record.last_name) if part)
    return DoctorProfile(
        id=record.id,
        name=name,
        credentials=record.specialty or DEFAULT_CREDENTIALS,
        locations=[
            Location(
                city=record.location or DEFAULT_CITY,
                address=record.clinic_name or ADDRESS_PLACEHOLDER,
                phone=record.phone or PHONE_PLACEHOLDER,
            )
        ],
        website=record.website or default_website,
        avatar_url=record.avatar_url,
    )


__all__ = ["DoctorNotFoundError", "DoctorProfileService", "to_doctor_profile"]
