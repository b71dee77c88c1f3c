from __future__ import annotations

import pytest

from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.quizzes import get_quiz_profile
from clinicleads_api.domain.schemas.doctors import DoctorProfile, Location, Testimonial
from clinicleads_api.services.ai.prompts import build_landing_page_prompt


def _doctor(**overrides) -> DoctorProfile:
    data = {
        "id": "d1",
        "name": "Dr. Jane Smith",
        "credentials": "MD",
        "locations": [
            Location(city="Fort Worth", address="6801 Oakmont Blvd", phone="(817) 332-8848")
        ],
        "website": "https://example.com",
    }
    data.update(overrides)
    return DoctorProfile(**data)


def test_prompt_embeds_doctor_facts() -> None:
    prompt = build_landing_page_prompt(_doctor(), QuizType.NOSE)

    assert "Dr. Jane Smith" in prompt
    assert "Fort Worth" in prompt
    assert "https://example.com" in prompt
    assert "Fort Worth: 6801 Oakmont Blvd, (817) 332-8848" in prompt
    assert "ONLY a valid JSON object" in prompt


@pytest.mark.parametrize("quiz_type", list(QuizType))
def test_prompt_names_every_content_key(quiz_type: QuizType) -> None:
    prompt = build_landing_page_prompt(_doctor(), quiz_type)

    for key in get_quiz_profile(quiz_type).content_keys:
        assert f'"{key}"' in prompt


def test_prompt_requests_two_testimonials_only_when_none_exist() -> None:
    without = build_landing_page_prompt(_doctor(), QuizType.TNSS)
    assert "invent exactly two" in without

    with_testimonials = build_landing_page_prompt(
        _doctor(testimonials=[Testimonial(text="Great care", author="Ann", location="Dallas")]),
        QuizType.TNSS,
    )
    assert "invent exactly two" not in with_testimonials
    assert '"Great care" - Ann, Dallas' in with_testimonials


def test_prompt_tolerates_sparse_profiles() -> None:
    prompt = build_landing_page_prompt(
        DoctorProfile(id="d2"),
        QuizType.SNOT22,
    )
    assert "SNOT-22" in prompt
    assert "- Name: \n" in prompt
