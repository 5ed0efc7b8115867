"""Template-agnostic data contracts for the resume editor.

These TypedDicts define the shape of the record the editor forms produce
and every other component reads. The record is replaced wholesale on
each edit; nothing downstream mutates it.
"""

from __future__ import annotations

from typing import TypedDict

from resume_builder.constants.layout_constants import CANONICAL_ORDER, SectionName
from resume_builder.models.pagination import Section

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "LanguageEntry",
    "PersonalInfo",
    "ResumeRecord",
    "build_sections",
    "completion_progress",
    "empty_resume",
    "full_name",
    "sample_resume",
]


class PersonalInfo(TypedDict, total=False):
    """Name, headline and contact details shown on page 1."""

    first_name: str
    last_name: str
    job_title: str
    address: str
    email: str
    phone: str
    website: str
    bio: str


class ExperienceEntry(TypedDict, total=False):
    """A single work-experience record."""

    title: str
    company: str
    location: str
    start_date: str  # ISO date string or human-readable
    end_date: str
    current: bool
    description: str


class EducationEntry(TypedDict, total=False):
    """A single education record."""

    degree: str
    institution: str
    location: str
    start_date: str
    end_date: str
    description: str


class LanguageEntry(TypedDict, total=False):
    """A spoken language and the proficiency level."""

    language: str
    proficiency: str


class ResumeRecord(TypedDict, total=False):
    """Top-level bundle passed to the measurer, the paginator and every template."""

    personal: PersonalInfo
    experience: list[ExperienceEntry]
    education: list[EducationEntry]
    skills: list[str]
    languages: list[LanguageEntry]


_CONTACT_FIELDS = ("address", "email", "phone", "website")


def empty_resume() -> ResumeRecord:
    """Return a record with every section present and empty."""
    return {
        "personal": {},
        "experience": [],
        "education": [],
        "skills": [],
        "languages": [],
    }


def sample_resume() -> ResumeRecord:
    """Return the placeholder content the editor starts with."""
    return {
        "personal": {
            "job_title": "Service Designer",
            "first_name": "Matthew",
            "last_name": "Smith",
            "address": "3808 Kuphal Cove Apt. 338",
            "email": "schuppe_angie@hotmail.com",
            "phone": "(123) 456-7890",
            "website": "info@example.com",
            "bio": (
                "Be concise - The harsh reality is that hiring managers only spent "
                "an average of 6 seconds on each resume."
            ),
        },
        "experience": [
            {
                "title": "Creative Director",
                "company": "Uber",
                "location": "New York City",
                "start_date": "Sep 2018",
                "end_date": "Jan 2020",
                "current": False,
                "description": (
                    "My role as a team lead at Uber consisted out of leading the team "
                    "that built up there first Design System that spread all across "
                    "their services."
                ),
            }
        ],
        "education": [
            {
                "degree": "Here comes your Degree",
                "institution": "University",
                "location": "Location",
                "start_date": "MM YYYY",
                "end_date": "MM YYYY",
                "description": (
                    "Here is the place where your description will appear. Be concise - "
                    "The harsh reality is that hiring managers only spent an average of "
                    "6 seconds on each resume."
                ),
            }
        ],
        "skills": ["UX Design", "UI Design", "Prototyping", "Wireframing", "User Research"],
        "languages": [
            {"language": "English", "proficiency": "Native"},
            {"language": "Spanish", "proficiency": "Intermediate"},
        ],
    }


def full_name(record: ResumeRecord) -> str:
    """Return ``"First Last"`` with blank parts dropped."""
    personal = record.get("personal", {})
    first = (personal.get("first_name") or "").strip()
    last = (personal.get("last_name") or "").strip()
    return f"{first} {last}".strip()


def _has_contact(personal: PersonalInfo) -> bool:
    return any((personal.get(key) or "").strip() for key in _CONTACT_FIELDS)


def build_sections(record: ResumeRecord) -> list[Section]:
    """Split *record* into paginatable sections, in canonical order.

    Sections with nothing to show are omitted: an empty experience list
    contributes no header, a blank bio contributes no profile block.
    """
    personal = record.get("personal", {})
    present: dict[SectionName, int] = {}

    if _has_contact(personal):
        present[SectionName.CONTACT] = 1
    if (personal.get("bio") or "").strip():
        present[SectionName.PROFILE] = 1

    experience = record.get("experience", [])
    if experience:
        present[SectionName.EXPERIENCE] = len(experience)
    education = record.get("education", [])
    if education:
        present[SectionName.EDUCATION] = len(education)

    if any(skill.strip() for skill in record.get("skills", [])):
        present[SectionName.SKILLS] = 1
    if any((lang.get("language") or "").strip() for lang in record.get("languages", [])):
        present[SectionName.LANGUAGES] = 1

    return [Section(name, present[name]) for name in CANONICAL_ORDER if name in present]


def completion_progress(record: ResumeRecord) -> int:
    """Return how complete the resume is, as a percentage.

    Four areas count equally: name, experience, education and skills.
    """
    personal = record.get("personal", {})
    filled = 0
    if personal.get("first_name") and personal.get("last_name"):
        filled += 1
    if record.get("experience"):
        filled += 1
    if record.get("education"):
        filled += 1
    if record.get("skills"):
        filled += 1
    return round(filled / 4 * 100)
