"""Modern resume template.

Dark full-width masthead band with centred white type; continuation
pages repeat the band in a slimmer form.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import WHITE, Block, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["ModernResumeTemplate"]

_BAND = (31, 41, 55)
_BAND_MUTED = (209, 213, 219)


class ModernResumeTemplate(ResumeTemplate):
    """Modern sans-serif resume with a dark header band."""

    key = "modern"
    style = TemplateStyle(
        family="Helvetica",
        accent=(31, 41, 55),
        rule=(229, 231, 235),
        inline_skills=True,
    )

    @property
    def name(self) -> str:
        return "Modern"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        rows = [
            TextRun(
                self.clean_text(full_name(record)),
                size=s.name_size,
                style="B",
                color=WHITE,
                align="C",
            )
        ]
        title = (personal.get("job_title") or "").strip()
        if title:
            rows.append(
                TextRun(self.clean_text(title), size=s.title_size, color=_BAND_MUTED, align="C")
            )
        contact = self._join(personal.get("email"), personal.get("phone"), separator="  |  ")
        if contact:
            rows.append(
                TextRun(
                    self.clean_text(contact),
                    size=s.body_size - 0.5,
                    color=_BAND_MUTED,
                    align="C",
                    space_before=6,
                )
            )
        return Block(rows=tuple(rows), family=s.family, padding=20, fill=_BAND, space_after=20)

    def continuation_header(self, record: ResumeRecord, page_number: int) -> Block:
        return self._band_continuation(record, page_number, _BAND)
