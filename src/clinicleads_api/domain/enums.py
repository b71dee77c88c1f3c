from __future__ import annotations

from enum import Enum


class QuizType(str, Enum):
    NOSE = "NOSE"
    SNOT12 = "SNOT12"
    SNOT22 = "SNOT22"
    TNSS = "TNSS"

    @classmethod
    def _missing_(cls, value: object) -> "QuizType | None":
        # Accept the hyphenated and lower-case spellings used in share links.
        if isinstance(value, str):
            normalized = value.replace("-", "").replace("_", "").upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class SectionKind(str, Enum):
    TEXT = "text"
    MULTILINE = "multiline"
    LIST = "list"
    TABLE = "table"
    TESTIMONIALS = "testimonials"
    LOCATIONS = "locations"


class GenerationState(str, Enum):
    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    DONE = "done"


__all__ = ["GenerationState", "QuizType", "SectionKind"]
