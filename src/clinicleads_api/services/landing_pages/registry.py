"""Process-wide generation bookkeeping shared by every request for the same page."""

from __future__ import annotations

import asyncio

from clinicleads_api.domain.enums import QuizType

PageKey = tuple[str, QuizType]


class PageGenerationState:
    """Attempt counter and locks for one (doctor, quiz type) page.

    Only the latest attempt may apply or store its result; the attempt check and the
    write happen together under `save_lock`. Loads for the page run one at a time, so
    a second loader sees the page the first one stored instead of calling the
    completion endpoint again.
    """

    def __init__(self) -> None:
        self.attempt = 0
        self.load_lock = asyncio.Lock()
        self.save_lock = asyncio.Lock()

    def next_attempt(self) -> int:
        self.attempt += 1
        return self.attempt


class GenerationRegistry:
    def __init__(self) -> None:
        self._pages: dict[PageKey, PageGenerationState] = {}

    def get(self, doctor_id: str, quiz_type: QuizType) -> PageGenerationState:
        key = (doctor_id, quiz_type)
        state = self._pages.get(key)
        if state is None:
            state = self._pages[key] = PageGenerationState()
        return state

    def __len__(self) -> int:
        return len(self._pages)


__all__ = ["GenerationRegistry", "PageGenerationState", "PageKey"]
