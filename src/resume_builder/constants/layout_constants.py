"""Page geometry and section taxonomy shared by the layout engine.

All lengths are CSS pixels at 96 DPI. The PDF canvas is created with a
user unit of ``PX_UNIT`` points, so one canvas unit equals one pixel and
measured heights can be drawn without conversion.
"""

from __future__ import annotations

from enum import StrEnum

# Points per CSS pixel (72 pt per inch / 96 px per inch).
PX_UNIT = 72 / 96

# A4 is 210mm x 297mm, approximately 794px x 1123px at 96 DPI.
A4_RATIO = 297 / 210
A4_WIDTH_PX = 794.0
A4_HEIGHT_PX = float(round(A4_WIDTH_PX * A4_RATIO))
PAGE_MARGIN_PX = 40.0


class SectionName(StrEnum):
    """Logical content groups of a resume."""

    CONTACT = "contact"
    PROFILE = "profile"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    LANGUAGES = "languages"


# Flow order of the rendered document.
CANONICAL_ORDER: tuple[SectionName, ...] = (
    SectionName.CONTACT,
    SectionName.PROFILE,
    SectionName.EXPERIENCE,
    SectionName.EDUCATION,
    SectionName.SKILLS,
    SectionName.LANGUAGES,
)

# Sections whose entries are placed one at a time.
MULTI_ITEM_SECTIONS: frozenset[SectionName] = frozenset(
    {SectionName.EXPERIENCE, SectionName.EDUCATION}
)

# Sections placed as one indivisible block.
SINGLE_BLOCK_SECTIONS: frozenset[SectionName] = frozenset(
    set(SectionName) - MULTI_ITEM_SECTIONS
)

SECTION_TITLES: dict[SectionName, str] = {
    SectionName.CONTACT: "Contact",
    SectionName.PROFILE: "Profile",
    SectionName.EXPERIENCE: "Experience",
    SectionName.EDUCATION: "Education",
    SectionName.SKILLS: "Skills",
    SectionName.LANGUAGES: "Languages",
}


def page_height_for_width(width: float) -> float:
    """Return the A-series page height for *width*."""
    return float(round(width * A4_RATIO))
