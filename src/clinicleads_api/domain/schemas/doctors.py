from __future__ import annotations

from pydantic import Field

from clinicleads_api.domain.schemas.base import BaseSchema


class Location(BaseSchema):
    city: str = Field("", description="City shown as the office label.")
    address: str = Field("", description="Street address of the office.")
    phone: str = Field("", description="Office phone number.")


class Testimonial(BaseSchema):
    text: str = Field(..., description="Patient quote.")
    author: str = Field("", description="Attribution such as 'Sarah M.'.")
    location: str = Field("", description="Where the patient is from.")


class DoctorProfile(BaseSchema):
    """Read-only facts about a clinician used to personalise landing pages."""

    id: str
    name: str = ""
    credentials: str = ""
    locations: list[Location] = Field(default_factory=list)
    testimonials: list[Testimonial] = Field(default_factory=list)
    website: str = ""
    avatar_url: str | None = None


__all__ = ["DoctorProfile", "Location", "Testimonial"]
