from __future__ import annotations

from .clients import ChatClientError, ChatCompletionClient, OpenRouterChatClient
from .extraction import extract_content, is_error_payload
from .generation_service import GenerationOutcome, LandingPageGenerator
from .prompts import LANDING_PAGE_PROMPT_TEMPLATE, build_landing_page_prompt

__all__ = [
    "ChatClientError",
    "ChatCompletionClient",
    "GenerationOutcome",
    "LANDING_PAGE_PROMPT_TEMPLATE",
    "LandingPageGenerator",
    "OpenRouterChatClient",
    "build_landing_page_prompt",
    "extract_content",
    "is_error_payload",
]
