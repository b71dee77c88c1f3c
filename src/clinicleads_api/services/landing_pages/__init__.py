from __future__ import annotations

from .editing import EditableSection, SectionValidationError, section_kinds
from .rendering import STOCK_TESTIMONIALS, render_landing_page
from .registry import GenerationRegistry, PageGenerationState
from .session import GenerationNotConfiguredError, LandingPageNotFoundError, LandingPageSession
from .store import ContentStore

__all__ = [
    "ContentStore",
    "EditableSection",
    "GenerationNotConfiguredError",
    "GenerationRegistry",
    "LandingPageNotFoundError",
    "LandingPageSession",
    "PageGenerationState",
    "STOCK_TESTIMONIALS",
    "SectionValidationError",
    "render_landing_page",
    "section_kinds",
]
