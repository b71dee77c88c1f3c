from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from clinicleads_api.api.dependencies import (
    ContentStoreDependency,
    DoctorServiceDependency,
    GenerationRegistryDependency,
    GeneratorDependency,
    RequiredGeneratorDependency,
    SettingsDependency,
)
from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.schemas.content import (
    ChatbotColors,
    CompactionResult,
    LandingPageView,
    SectionUpdate,
)
from clinicleads_api.domain.schemas.doctors import DoctorProfile
from clinicleads_api.services.ai import LandingPageGenerator
from clinicleads_api.services.doctors import DoctorNotFoundError
from clinicleads_api.services.landing_pages import (
    ContentStore,
    GenerationNotConfiguredError,
    GenerationRegistry,
    LandingPageNotFoundError,
    LandingPageSession,
    SectionValidationError,
)

router = APIRouter(prefix="/landing-pages", tags=["Landing Pages"])


def parse_quiz_type(
    quiz_type: Annotated[str, Path(description="NOSE, SNOT12, SNOT22 or TNSS")],
) -> QuizType:
    try:
        return QuizType(quiz_type)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unsupported quiz type: {quiz_type}",
        ) from exc


QuizTypeDependency = Annotated[QuizType, Depends(parse_quiz_type)]


async def _load_doctor(doctor_id: str, doctors: DoctorServiceDependency) -> DoctorProfile:
    try:
        return await doctors.get_profile(doctor_id)
    except DoctorNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


DoctorDependency = Annotated[DoctorProfile, Depends(_load_doctor)]


def _session(
    doctor: DoctorProfile,
    quiz_type: QuizType,
    store: ContentStore,
    registry: GenerationRegistry,
    generator: LandingPageGenerator | None,
    expose_debug: bool,
) -> LandingPageSession:
    return LandingPageSession(
        doctor=doctor,
        quiz_type=quiz_type,
        store=store,
        generator=generator,
        expose_debug=expose_debug,
        shared=registry.get(doctor.id, quiz_type),
    )


@router.get("/{doctor_id}/{quiz_type}", response_model=LandingPageView)
async def get_landing_page(
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
    registry: GenerationRegistryDependency,
    generator: GeneratorDependency,
    settings: SettingsDependency,
) -> LandingPageView:
    """Return the stored landing page, generating and saving one when none is usable."""
    session = _session(
        doctor, quiz_type, store, registry, generator, settings.expose_generation_debug
    )
    try:
        return await session.load()
    except GenerationNotConfiguredError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc


@router.post("/{doctor_id}/{quiz_type}/retry", response_model=LandingPageView)
async def retry_landing_page(
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
    registry: GenerationRegistryDependency,
    generator: RequiredGeneratorDependency,
    settings: SettingsDependency,
) -> LandingPageView:
    """Regenerate the page even if a usable one is stored."""
    session = _session(
        doctor, quiz_type, store, registry, generator, settings.expose_generation_debug
    )
    return await session.retry()


@router.put("/{doctor_id}/{quiz_type}/sections/{section}", response_model=LandingPageView)
async def update_section(
    section: str,
    payload: SectionUpdate,
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
    registry: GenerationRegistryDependency,
    settings: SettingsDependency,
) -> LandingPageView:
    """Replace one section and save the whole document."""
    session = _session(doctor, quiz_type, store, registry, None, settings.expose_generation_debug)
    await session.load(allow_generation=False)
    try:
        session.begin_edit(section)
        session.update_edit(payload.value)
        return await session.save_edit()
    except LandingPageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SectionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/{doctor_id}/{quiz_type}/colors", response_model=ChatbotColors)
async def get_chatbot_colors(
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
) -> ChatbotColors:
    return await store.get_colors(doctor.id, quiz_type)


@router.put("/{doctor_id}/{quiz_type}/colors", response_model=ChatbotColors)
async def set_chatbot_colors(
    payload: ChatbotColors,
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
) -> ChatbotColors:
    return await store.set_colors(doctor.id, quiz_type, payload)


@router.post("/{doctor_id}/{quiz_type}/compact", response_model=CompactionResult)
async def compact_landing_pages(
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
) -> CompactionResult:
    """Delete duplicate rows for the key, keeping the most recently updated one."""
    return await store.compact(doctor.id, quiz_type)


@router.delete("/{doctor_id}/{quiz_type}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_landing_page(
    doctor: DoctorDependency,
    quiz_type: QuizTypeDependency,
    store: ContentStoreDependency,
) -> None:
    await store.delete(doctor.id, quiz_type)


__all__ = ["router"]
