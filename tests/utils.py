from __future__ import annotations

import asyncio
import json
from typing import Any

from clinicleads_api.services.ai.clients import ChatClientError

DOCTOR_ID = "doc-jane-smith"


def snot12_document(**overrides: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "headline": "Breathe Easier With Expert Sinus Care",
        "intro": "Chronic sinus symptoms do not have to define your days.",
        "whatIsSNOT12": "The SNOT-12 measures how sinus symptoms affect your life.",
        "symptoms": ["Facial pressure", "Post-nasal drip"],
        "treatments": "From medical therapy to balloon sinuplasty.",
        "comparisonTable": [["Balloon Sinuplasty", "Quick recovery", "Not for all", "Minimal"]],
    }
    document.update(overrides)
    return document


def completion_text(document: dict[str, Any]) -> str:
    return json.dumps(document)


class FakeChatClient:
    """Returns queued completions in order; queued exceptions are raised instead."""

    def __init__(self, responses: list[str | Exception] | None = None) -> None:
        self.responses: list[str | Exception] = list(responses or [])
        self.prompts: list[str] = []
        self.closed = False

    @property
    def default_model(self) -> str:
        return "test-model"

    def queue(self, *responses: str | Exception) -> None:
        self.responses.extend(responses)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise ChatClientError("No completion queued")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self) -> None:
        self.closed = True


class GatedChatClient:
    """Each call blocks until its gate is released, so completions can resolve out of order."""

    def __init__(self, responses: list[str]) -> None:
        self._responses = responses
        self.gates = [asyncio.Event() for _ in responses]
        self.started = [asyncio.Event() for _ in responses]
        self._calls = 0

    @property
    def default_model(self) -> str:
        return "gated-model"

    @property
    def calls(self) -> int:
        return self._calls

    async def complete(self, prompt: str) -> str:
        index = self._calls
        self._calls += 1
        self.started[index].set()
        await self.gates[index].wait()
        return self._responses[index]

    async def aclose(self) -> None:
        return None


__all__ = [
    "DOCTOR_ID",
    "FakeChatClient",
    "GatedChatClient",
    "completion_text",
    "snot12_document",
]
