"""Static per-quiz configuration for landing page generation and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from clinicleads_api.domain.enums import QuizType

COMMON_CONTENT_KEYS: tuple[str, ...] = (
    "headline",
    "intro",
    "symptoms",
    "treatments",
    "treatmentOptions",
    "comparisonTable",
    "whyChoose",
    "testimonials",
    "contact",
    "cta",
)


@dataclass(frozen=True, slots=True)
class QuizProfile:
    """Copy and validation rules for one symptom-assessment quiz."""

    quiz_type: QuizType
    display_name: str
    condition: str
    audience_focus: str
    explainer_key: str
    overview_topics: Mapping[str, str] = field(default_factory=dict)
    required_fields: tuple[str, ...] = ()
    fallback_text: Mapping[str, str] = field(default_factory=dict)
    fallback_lists: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def content_keys(self) -> tuple[str, ...]:
        """Every top-level key the generator is asked to produce, in prompt order."""
        head, tail = COMMON_CONTENT_KEYS[:2], COMMON_CONTENT_KEYS[2:]
        return (*head, self.explainer_key, *tail[:3], *self.overview_topics, *tail[3:])


_SHARED_WHY_CHOOSE = (
    "Board-certified ENT specialists with extensive experience",
    "Comprehensive diagnostic evaluation using validated assessments",
    "Full spectrum of treatment options from medical to surgical",
    "State-of-the-art facilities and advanced procedures",
    "Proven track record of successful outcomes",
)

_NOSE = QuizProfile(
    quiz_type=QuizType.NOSE,
    display_name="NOSE",
    condition="Nasal Airway Obstruction (NAO)",
    audience_focus="nasal breathing struggles",
    explainer_key="whatIsNAO",
    overview_topics=MappingProxyType(
        {
            "vivAerOverview": "the VivAer radiofrequency nasal airway remodeling procedure",
            "lateraOverview": "the Latera absorbable nasal implant",
            "surgicalProcedures": "traditional surgery such as septoplasty and turbinate reduction",
        }
    ),
    fallback_text=MappingProxyType(
        {
            "headline": "Struggling to Breathe Through Your Nose? You're Not Alone.",
            "intro": (
                "Take our quick NOSE assessment to discover if nasal airway obstruction is "
                "affecting your quality of life and learn about proven treatment options "
                "available right here in your area."
            ),
            "whatIsNAO": (
                "Nasal Airway Obstruction (NAO) occurs when something blocks or limits airflow "
                "through your nasal passages. It can be caused by a deviated septum, enlarged "
                "turbinates, or nasal valve collapse."
            ),
            "treatments": (
                "We offer treatment options ranging from conservative medical management to "
                "advanced minimally invasive procedures, tailored to the severity of your "
                "obstruction."
            ),
            "cta": (
                "Take our quick NOSE assessment to see if you're a candidate for nasal airway "
                "treatment. It takes just 2 minutes."
            ),
        }
    ),
    fallback_lists=MappingProxyType(
        {
            "symptoms": (
                "Chronic nasal congestion that doesn't improve with decongestants",
                "Difficulty breathing through your nose during exercise",
                "Frequent mouth breathing, especially at night",
                "Snoring or sleep disruption",
                "Reduced sense of smell or taste",
                "Chronic fatigue from poor sleep quality",
            ),
            "treatmentOptions": (
                "Medical Management: Nasal sprays, antihistamines, and lifestyle changes",
                "VivAer Nasal Airway Remodeling: In-office radiofrequency treatment",
                "Latera Nasal Implant: Absorbable support for weak nasal cartilage",
                "Septoplasty: Surgical correction of a deviated septum",
            ),
            "whyChoose": _SHARED_WHY_CHOOSE,
        }
    ),
)

_SNOT12 = QuizProfile(
    quiz_type=QuizType.SNOT12,
    display_name="SNOT-12",
    condition="chronic sinus and nasal symptoms (chronic rhinosinusitis)",
    audience_focus="sinus symptoms affecting quality of life",
    explainer_key="whatIsSNOT12",
    overview_topics=MappingProxyType(
        {
            "balloonSinuplastyOverview": "balloon sinuplasty",
            "sinusSurgeryOverview": "functional endoscopic sinus surgery",
        }
    ),
    required_fields=("headline", "intro", "whatIsSNOT12", "symptoms", "treatments"),
    fallback_text=MappingProxyType(
        {
            "headline": "Suffering from Chronic Sinus and Nasal Symptoms? Get Relief Today.",
            "intro": (
                "Take our quick SNOT-12 assessment to evaluate how your sinus and nasal symptoms "
                "are impacting your quality of life and discover personalized treatment options "
                "available in your area."
            ),
            "whatIsSNOT12": (
                "The SNOT-12 (Sino-Nasal Outcome Test) is a validated 12-question assessment that "
                "measures how much your sinus and nasal symptoms are affecting your quality of life."
            ),
            "treatments": (
                "Our practice offers a comprehensive range of treatment options for chronic sinus "
                "and nasal conditions, from conservative medical management to advanced minimally "
                "invasive procedures."
            ),
            "cta": (
                "Take our SNOT-12 assessment to see how much your sinus symptoms are affecting you "
                "and discover personalized treatment options."
            ),
        }
    ),
    fallback_lists=MappingProxyType(
        {
            "symptoms": (
                "Chronic nasal congestion and blockage",
                "Persistent runny nose and post-nasal drip",
                "Thick nasal discharge and sinus pressure",
                "Decreased sense of smell and taste",
                "Facial pain and pressure around sinuses",
                "Difficulty sleeping due to breathing problems",
            ),
            "treatmentOptions": (
                "Medical Management: Nasal sprays, antihistamines, and decongestants",
                "Balloon Sinuplasty: Minimally invasive sinus dilation procedure",
                "Endoscopic Sinus Surgery: Advanced surgical treatment for chronic sinusitis",
                "Immunotherapy: Targeted treatment for allergy-related symptoms",
            ),
            "whyChoose": (
                *_SHARED_WHY_CHOOSE,
                "Personalized treatment plans based on your SNOT-12 results",
            ),
        }
    ),
)

_SNOT22 = QuizProfile(
    quiz_type=QuizType.SNOT22,
    display_name="SNOT-22",
    condition="chronic rhinosinusitis",
    audience_focus="the full impact of sinus disease on sleep, mood, and daily life",
    explainer_key="whatIsSNOT22",
    overview_topics=_SNOT12.overview_topics,
    required_fields=("headline", "intro", "whatIsSNOT22", "symptoms", "treatments"),
    fallback_text=MappingProxyType(
        {
            **_SNOT12.fallback_text,
            "intro": (
                "Take our SNOT-22 assessment to measure how sinus and nasal symptoms affect your "
                "sleep, mood, and daily life, and discover treatment options in your area."
            ),
            "whatIsSNOT22": (
                "The SNOT-22 (Sino-Nasal Outcome Test) is a validated 22-question assessment used "
                "worldwide to measure the severity of chronic rhinosinusitis and its impact on "
                "quality of life."
            ),
            "cta": (
                "Take our SNOT-22 assessment to understand your sinus symptom burden and explore "
                "personalized treatment options."
            ),
        }
    ),
    fallback_lists=_SNOT12.fallback_lists,
)

_TNSS = QuizProfile(
    quiz_type=QuizType.TNSS,
    display_name="TNSS",
    condition="nasal allergy symptoms (allergic rhinitis)",
    audience_focus="nasal allergy relief",
    explainer_key="whatIsTNSS",
    overview_topics=MappingProxyType(
        {
            "allergyTestingOverview": "allergy testing",
            "immunotherapyOverview": "allergen immunotherapy",
        }
    ),
    required_fields=("headline", "intro", "whatIsTNSS", "symptoms", "treatments"),
    fallback_text=MappingProxyType(
        {
            "headline": "Tired of Nasal Allergy Symptoms? Find Lasting Relief.",
            "intro": (
                "Take our quick TNSS (Total Nasal Symptom Score) assessment to evaluate your nasal "
                "allergy symptoms and discover personalized treatment options available in your area."
            ),
            "whatIsTNSS": (
                "The TNSS (Total Nasal Symptom Score) is a validated 4-question assessment that "
                "quickly evaluates the severity of your nasal allergy symptoms."
            ),
            "treatments": (
                "Our practice offers a comprehensive range of treatment options for nasal allergy "
                "symptoms, from over-the-counter solutions to advanced medical treatments."
            ),
            "cta": (
                "Don't let nasal allergy symptoms control your life. Take our quick TNSS "
                "assessment to discover personalized treatment options."
            ),
        }
    ),
    fallback_lists=MappingProxyType(
        {
            "symptoms": (
                "Nasal congestion",
                "Runny nose",
                "Nasal itching",
                "Frequent sneezing",
            ),
            "treatmentOptions": (
                "Antihistamines and nasal steroid sprays",
                "Allergy testing to identify triggers",
                "Allergen immunotherapy (shots or drops)",
                "In-office procedures for persistent symptoms",
            ),
            "whyChoose": _SHARED_WHY_CHOOSE,
        }
    ),
)

QUIZ_PROFILES: Mapping[QuizType, QuizProfile] = MappingProxyType(
    {profile.quiz_type: profile for profile in (_NOSE, _SNOT12, _SNOT22, _TNSS)}
)


def get_quiz_profile(quiz_type: QuizType) -> QuizProfile:
    return QUIZ_PROFILES[quiz_type]


__all__ = ["COMMON_CONTENT_KEYS", "QUIZ_PROFILES", "QuizProfile", "get_quiz_profile"]
