"""Turn a stored or freshly generated document into displayable copy.

Fallback copy is substituted here only; it is never written back to the store.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.quizzes import QuizProfile, get_quiz_profile
from clinicleads_api.domain.schemas.content import RenderedContent
from clinicleads_api.domain.schemas.doctors import DoctorProfile, Location, Testimonial
from clinicleads_api.services.landing_pages.editing import TABLE_WIDTH

STOCK_TESTIMONIALS: tuple[Testimonial, ...] = (
    Testimonial(
        text="The treatment was quick and effective. I can breathe so much better now!",
        author="Sarah M.",
        location="Local Patient",
    ),
    Testimonial(
        text="Life-changing results with minimal downtime. Highly recommend!",
        author="James R.",
        location="Local Patient",
    ),
)

_TABLE_OBJECT_KEYS = (("name", "treatment"), ("pros",), ("cons",), ("invasiveness",))


def _text(content: Mapping[str, Any], key: str, fallback: str) -> str:
    value = content.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return fallback


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _list(content: Mapping[str, Any], key: str, profile: QuizProfile) -> list[str]:
    return _string_list(content.get(key)) or list(profile.fallback_lists.get(key, ()))


def _table_row(row: Any) -> list[str] | None:
    if isinstance(row, Mapping):
        cells = []
        for aliases in _TABLE_OBJECT_KEYS:
            cell = next((row[alias] for alias in aliases if alias in row), "")
            cells.append(cell if isinstance(cell, str) else "")
        return cells
    if isinstance(row, list) and len(row) == TABLE_WIDTH:
        return [cell if isinstance(cell, str) else str(cell) for cell in row]
    return None


def _comparison_table(value: Any) -> list[list[str]]:
    if not isinstance(value, list):
        return []
    return [row for row in (_table_row(item) for item in value) if row is not None]


def _models(value: Any, model: type[Testimonial] | type[Location]) -> list[Any]:
    if not isinstance(value, list):
        return []
    items = []
    for raw in value:
        try:
            items.append(model.model_validate(raw))
        except ValidationError:
            continue
    return items


def _default_contact(doctor: DoctorProfile) -> str:
    phone = doctor.locations[0].phone if doctor.locations else ""
    cities = " and ".join(location.city for location in doctor.locations if location.city)
    message = f"Schedule your consultation with {doctor.name or 'our team'} today."
    if phone and cities:
        return f"{message} Call {phone} or visit us in {cities}."
    if phone:
        return f"{message} Call {phone}."
    if cities:
        return f"{message} Visit us in {cities}."
    return message


def render_landing_page(
    content: Mapping[str, Any] | None,
    doctor: DoctorProfile,
    quiz_type: QuizType,
) -> RenderedContent:
    profile = get_quiz_profile(quiz_type)
    content = content or {}
    fallback = profile.fallback_text

    testimonials = (
        _models(content.get("testimonials"), Testimonial)
        or list(doctor.testimonials)
        or list(STOCK_TESTIMONIALS)
    )
    locations = _models(content.get("locations"), Location) or list(doctor.locations)

    return RenderedContent(
        headline=_text(content, "headline", fallback.get("headline", "")),
        intro=_text(content, "intro", fallback.get("intro", "")),
        explainer=_text(content, profile.explainer_key, fallback.get(profile.explainer_key, "")),
        symptoms=_list(content, "symptoms", profile),
        treatments=_text(content, "treatments", fallback.get("treatments", "")),
        treatment_options=_list(content, "treatmentOptions", profile),
        comparison_table=_comparison_table(content.get("comparisonTable")),
        overviews={
            key: _text(content, key, f"Ask our team whether {topic} is right for you.")
            for key, topic in profile.overview_topics.items()
        },
        why_choose=_list(content, "whyChoose", profile),
        testimonials=testimonials,
        locations=locations,
        contact=_text(content, "contact", _default_contact(doctor)),
        cta=_text(content, "cta", fallback.get("cta", "")),
    )


__all__ = ["STOCK_TESTIMONIALS", "render_landing_page"]
