"""Chat-completion client used by the landing page generation pipeline."""

from __future__ import annotations

import json
import logging
from typing import Protocol, TypeAlias

import httpx

logger = logging.getLogger(__name__)

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]


class ChatClientError(RuntimeError):
    """Raised when the completion endpoint fails or returns no usable text."""


class ChatCompletionClient(Protocol):
    """Protocol representing the subset of chat-completion behaviour we rely on."""

    @property
    def default_model(self) -> str: ...

    async def complete(self, prompt: str) -> str: ...

    async def aclose(self) -> None: ...


class OpenRouterChatClient:
    """Thin async client for OpenAI-compatible chat-completion endpoints."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        endpoint: str = "https://openrouter.ai/api/v1",
        max_tokens: int = 12000,
        temperature: float = 0.7,
        top_p: float = 0.9,
        timeout: float = 90.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("An OpenRouter API key is required.")
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._top_p = top_p
        self._client = http_client or httpx.AsyncClient(
            base_url=endpoint,
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json"},
        )
        self._owns_client = http_client is None

    @property
    def default_model(self) -> str:
        return self._model

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def build_payload(self, prompt: str) -> JSONObject:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "top_p": self._top_p,
        }

    async def complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the first choice's message text."""
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty.")

        try:
            response = await self._client.post(
                "chat/completions",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=self.build_payload(prompt),
            )
        except httpx.HTTPError as exc:
            logger.error(
                "Chat completion transport failure",
                extra={"model": self._model, "error": str(exc)},
            )
            raise ChatClientError(f"Chat completion request failed: {exc}") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error_summary = _summarize_response_error(exc.response)
            logger.error(
                "Chat completion request failed",
                extra={
                    "status_code": exc.response.status_code,
                    "url": str(exc.request.url),
                    "model": self._model,
                    "error_summary": error_summary,
                    "request_id": exc.response.headers.get("x-request-id"),
                },
            )
            raise ChatClientError(
                f"Chat completion failed ({exc.response.status_code}): {error_summary}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ChatClientError("Chat completion response was not valid JSON.") from exc

        content = _first_choice_content(data)
        if content is None or not content.strip():
            logger.warning(
                "Chat completion returned no content",
                extra={"model": self._model, "status_code": response.status_code},
            )
            raise ChatClientError("Chat completion response did not contain any content.")
        return content


def _first_choice_content(data: object) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def _summarize_response_error(response: httpx.Response) -> str:
    """Provide a concise textual summary for logging failed completion calls."""
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return text or "No response body"

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            code = error.get("code")
            summary_parts = []
            if code is not None and code != "":
                summary_parts.append(str(code))
            if isinstance(message, str) and message:
                summary_parts.append(message)
            return ": ".join(summary_parts) or "Endpoint returned an error"
        if isinstance(error, str) and error:
            return error
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    return json.dumps(payload)


__all__ = [
    "ChatClientError",
    "ChatCompletionClient",
    "JSONObject",
    "JSONValue",
    "OpenRouterChatClient",
]
