"""Editable landing page sections and validation of edited values."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from clinicleads_api.domain.enums import QuizType, SectionKind
from clinicleads_api.domain.quizzes import get_quiz_profile
from clinicleads_api.domain.schemas.doctors import Location, Testimonial

TABLE_WIDTH = 4

_FIXED_SECTIONS: Mapping[str, SectionKind] = {
    "headline": SectionKind.TEXT,
    "intro": SectionKind.MULTILINE,
    "symptoms": SectionKind.LIST,
    "treatments": SectionKind.MULTILINE,
    "treatmentOptions": SectionKind.LIST,
    "comparisonTable": SectionKind.TABLE,
    "whyChoose": SectionKind.LIST,
    "testimonials": SectionKind.TESTIMONIALS,
    "locations": SectionKind.LOCATIONS,
    "contact": SectionKind.MULTILINE,
    "cta": SectionKind.MULTILINE,
}


class SectionValidationError(ValueError):
    """Raised when a section key is unknown or an edited value has the wrong shape."""


def section_kinds(quiz_type: QuizType) -> dict[str, SectionKind]:
    """Every editable section for a quiz type, keyed by its document field."""
    profile = get_quiz_profile(quiz_type)
    kinds = dict(_FIXED_SECTIONS)
    kinds[profile.explainer_key] = SectionKind.MULTILINE
    for key in profile.overview_topics:
        kinds[key] = SectionKind.MULTILINE
    return kinds


def resolve_section(quiz_type: QuizType, section: str) -> SectionKind:
    try:
        return section_kinds(quiz_type)[section]
    except KeyError:
        raise SectionValidationError(
            f"Section '{section}' is not editable for {quiz_type.value}"
        ) from None


def _validate_text(value: Any) -> str:
    if not isinstance(value, str):
        raise SectionValidationError("Expected a string value")
    return value


def _validate_list(value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SectionValidationError("Expected a list of strings")
    return list(value)


def _validate_table(value: Any) -> list[list[str]]:
    if not isinstance(value, list):
        raise SectionValidationError("Expected a list of table rows")
    rows: list[list[str]] = []
    for index, row in enumerate(value):
        if not isinstance(row, list) or not all(isinstance(cell, str) for cell in row):
            raise SectionValidationError(f"Row {index} must be a list of strings")
        if len(row) != TABLE_WIDTH:
            raise SectionValidationError(
                f"Row {index} must have exactly {TABLE_WIDTH} cells (found {len(row)})"
            )
        rows.append(list(row))
    return rows


def _validate_testimonials(value: Any) -> list[dict[str, str]]:
    if not isinstance(value, list):
        raise SectionValidationError("Expected a list of testimonials")
    try:
        return [Testimonial.model_validate(item).model_dump() for item in value]
    except ValidationError as exc:
        raise SectionValidationError(f"Invalid testimonial: {exc.errors()[0]['msg']}") from exc


def _validate_locations(value: Any) -> list[dict[str, str]]:
    if not isinstance(value, list):
        raise SectionValidationError("Expected a list of locations")
    try:
        return [Location.model_validate(item).model_dump() for item in value]
    except ValidationError as exc:
        raise SectionValidationError(f"Invalid location: {exc.errors()[0]['msg']}") from exc


_VALIDATORS: Mapping[SectionKind, Callable[[Any], Any]] = {
    SectionKind.TEXT: _validate_text,
    SectionKind.MULTILINE: _validate_text,
    SectionKind.LIST: _validate_list,
    SectionKind.TABLE: _validate_table,
    SectionKind.TESTIMONIALS: _validate_testimonials,
    SectionKind.LOCATIONS: _validate_locations,
}


def validate_section_value(kind: SectionKind, value: Any) -> Any:
    """Return a JSON-ready copy of the value, or raise SectionValidationError."""
    return _VALIDATORS[kind](value)


@dataclass(slots=True)
class EditableSection:
    """Working copy of one section while it is being edited."""

    section: str
    kind: SectionKind
    value: Any

    @classmethod
    def open(
        cls, quiz_type: QuizType, section: str, current: Any, *, default: Any = None
    ) -> "EditableSection":
        kind = resolve_section(quiz_type, section)
        source = current if current is not None else default
        if source is None:
            source = "" if kind in (SectionKind.TEXT, SectionKind.MULTILINE) else []
        return cls(section=section, kind=kind, value=copy.deepcopy(source))

    def validated(self) -> Any:
        return validate_section_value(self.kind, self.value)


__all__ = [
    "EditableSection",
    "SectionValidationError",
    "TABLE_WIDTH",
    "resolve_section",
    "section_kinds",
    "validate_section_value",
]
