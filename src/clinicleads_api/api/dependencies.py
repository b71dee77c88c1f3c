from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicleads_api.config.settings import Settings, get_settings
from clinicleads_api.db.session import get_session
from clinicleads_api.services.ai import (
    ChatCompletionClient,
    LandingPageGenerator,
    OpenRouterChatClient,
)
from clinicleads_api.services.doctors import DoctorProfileService
from clinicleads_api.services.landing_pages import ContentStore, GenerationRegistry

AsyncSessionDependency = Annotated[AsyncSession, Depends(get_session)]
SettingsDependency = Annotated[Settings, Depends(get_settings)]


def get_content_store(session: AsyncSessionDependency) -> ContentStore:
    return ContentStore(session)


def get_generation_registry(request: Request) -> GenerationRegistry:
    """The registry `create_app` keeps on `app.state`, shared by all requests."""
    return request.app.state.generation_registry


def get_doctor_service(
    session: AsyncSessionDependency, settings: SettingsDependency
) -> DoctorProfileService:
    return DoctorProfileService(session, default_website=settings.default_practice_website)


async def get_chat_client(
    settings: SettingsDependency,
) -> AsyncIterator[ChatCompletionClient | None]:
    """Yield a completion client, or None when no API key is configured.

    Pages that are already stored can be served without a key; generation paths turn a
    missing client into a 503.
    """
    if not settings.openrouter_api_key:
        yield None
        return

    client = OpenRouterChatClient(
        api_key=settings.openrouter_api_key,
        model=settings.openrouter_model,
        endpoint=settings.openrouter_endpoint,
        max_tokens=settings.openrouter_max_tokens,
        temperature=settings.openrouter_temperature,
        top_p=settings.openrouter_top_p,
        timeout=settings.openrouter_request_timeout_seconds,
    )
    try:
        yield client
    finally:
        await client.aclose()


ChatClientDependency = Annotated[ChatCompletionClient | None, Depends(get_chat_client)]


def get_generator(client: ChatClientDependency) -> LandingPageGenerator | None:
    return LandingPageGenerator(client) if client is not None else None


def require_generator(
    generator: Annotated[LandingPageGenerator | None, Depends(get_generator)],
) -> LandingPageGenerator:
    if generator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI content generation is not configured.",
        )
    return generator


ContentStoreDependency = Annotated[ContentStore, Depends(get_content_store)]
DoctorServiceDependency = Annotated[DoctorProfileService, Depends(get_doctor_service)]
GenerationRegistryDependency = Annotated[GenerationRegistry, Depends(get_generation_registry)]
GeneratorDependency = Annotated[LandingPageGenerator | None, Depends(get_generator)]
RequiredGeneratorDependency = Annotated[LandingPageGenerator, Depends(require_generator)]


__all__ = [
    "AsyncSessionDependency",
    "ChatClientDependency",
    "ContentStoreDependency",
    "DoctorServiceDependency",
    "GenerationRegistryDependency",
    "GeneratorDependency",
    "RequiredGeneratorDependency",
    "SettingsDependency",
    "get_chat_client",
    "get_content_store",
    "get_doctor_service",
    "get_generation_registry",
    "get_generator",
    "require_generator",
]
