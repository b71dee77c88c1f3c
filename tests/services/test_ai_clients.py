from __future__ import annotations

import json

import httpx
import pytest

from clinicleads_api.services.ai.clients import ChatClientError, OpenRouterChatClient


def _completion(content: object) -> dict[str, object]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_complete_posts_chat_payload_and_returns_first_choice() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer secret"
        body = json.loads(request.content.decode("utf-8"))
        assert body == {
            "model": "test-model",
            "messages": [{"role": "user", "content": "Write a page"}],
            "max_tokens": 500,
            "temperature": 0.7,
            "top_p": 0.9,
        }
        return httpx.Response(200, json=_completion('{"headline": "Hi"}'))

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://example.com/api/v1"
    ) as async_client:
        client = OpenRouterChatClient(
            api_key="secret", model="test-model", max_tokens=500, http_client=async_client
        )
        assert await client.complete("Write a page") == '{"headline": "Hi"}'


@pytest.mark.asyncio
async def test_complete_raises_on_error_status() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"code": 429, "message": "Rate limited"}})

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://example.com"
    ) as async_client:
        client = OpenRouterChatClient(api_key="secret", model="m", http_client=async_client)
        with pytest.raises(ChatClientError) as excinfo:
            await client.complete("prompt")
    assert "429" in str(excinfo.value)
    assert "Rate limited" in str(excinfo.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        _completion(""),
        _completion(None),
        {"id": "missing-choices"},
    ],
)
async def test_complete_rejects_empty_completions(payload: dict[str, object]) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://example.com"
    ) as async_client:
        client = OpenRouterChatClient(api_key="secret", model="m", http_client=async_client)
        with pytest.raises(ChatClientError):
            await client.complete("prompt")


@pytest.mark.asyncio
async def test_complete_wraps_transport_errors() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://example.com"
    ) as async_client:
        client = OpenRouterChatClient(api_key="secret", model="m", http_client=async_client)
        with pytest.raises(ChatClientError):
            await client.complete("prompt")


@pytest.mark.asyncio
async def test_complete_rejects_blank_prompt() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:  # pragma: no cover - never called
        raise AssertionError("no request expected")

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://example.com"
    ) as async_client:
        client = OpenRouterChatClient(api_key="secret", model="m", http_client=async_client)
        with pytest.raises(ValueError):
            await client.complete("   ")


def test_client_requires_api_key() -> None:
    with pytest.raises(ValueError):
        OpenRouterChatClient(api_key=None, model="m")


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    async with httpx.AsyncClient(base_url="https://example.com") as async_client:
        client = OpenRouterChatClient(api_key="secret", model="m", http_client=async_client)
        await client.aclose()
        assert not async_client.is_closed
