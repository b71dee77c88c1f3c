from __future__ import annotations

from clinicleads_api.domain.enums import QuizType
from clinicleads_api.domain.quizzes import get_quiz_profile
from clinicleads_api.domain.schemas.doctors import DoctorProfile

LANDING_PAGE_PROMPT_TEMPLATE = """
You are a medical copywriter creating patient-facing landing page content for an ENT practice.
The page introduces the {display_name} assessment for patients with {condition} and should speak to {audience_focus}.

DOCTOR INFORMATION:
- Name: {name}
- Credentials: {credentials}
- Locations: {locations}
- Website: {website}
- Existing Testimonials: {testimonials}

INSTRUCTIONS:
- Write in an educational, reassuring tone that encourages the reader to take the assessment.
- "{explainer_key}" explains the condition and what the {display_name} assessment measures.
- "symptoms", "treatmentOptions" and "whyChoose" are arrays of short strings.
- "comparisonTable" is an array of rows, each row exactly four strings: treatment, pros, cons, invasiveness.
{overview_lines}
- "testimonials" is an array of objects with "text", "author" and "location".{testimonial_instruction}
- "contact" invites the reader to schedule with {name} and mentions the office phone.
- "cta" asks the reader to take the {display_name} assessment.

Return ONLY a valid JSON object with exactly these top-level keys: {keys}.
Do not wrap the JSON in markdown and do not add commentary before or after it.
""".strip()

TESTIMONIAL_REQUEST = (
    " The doctor has no testimonials on file, so invent exactly two realistic testimonials."
)


def _format_locations(doctor: DoctorProfile) -> str:
    return " | ".join(
        f"{location.city}: {location.address}, {location.phone}" for location in doctor.locations
    )


def _format_testimonials(doctor: DoctorProfile) -> str:
    if not doctor.testimonials:
        return "None provided"
    return "; ".join(
        f'"{item.text}" - {item.author}, {item.location}' for item in doctor.testimonials
    )


def build_landing_page_prompt(doctor: DoctorProfile, quiz_type: QuizType) -> str:
    """Render the generation prompt for one doctor and quiz type."""
    profile = get_quiz_profile(quiz_type)
    overview_lines = "\n".join(
        f'- "{key}" is a short paragraph describing {topic}.'
        for key, topic in profile.overview_topics.items()
    )
    return LANDING_PAGE_PROMPT_TEMPLATE.format(
        display_name=profile.display_name,
        condition=profile.condition,
        audience_focus=profile.audience_focus,
        name=doctor.name or "",
        credentials=doctor.credentials or "",
        locations=_format_locations(doctor),
        website=doctor.website or "",
        testimonials=_format_testimonials(doctor),
        explainer_key=profile.explainer_key,
        overview_lines=overview_lines,
        testimonial_instruction="" if doctor.testimonials else TESTIMONIAL_REQUEST,
        keys=", ".join(f'"{key}"' for key in profile.content_keys),
    )


__all__ = ["LANDING_PAGE_PROMPT_TEMPLATE", "build_landing_page_prompt"]
