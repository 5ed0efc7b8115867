"""Creative resume template.

Emerald masthead band with centred type, green section titles and
skills set inline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import WHITE, Block, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["CreativeResumeTemplate"]

_BAND = (16, 185, 129)


class CreativeResumeTemplate(ResumeTemplate):
    """Colourful layout for design-oriented roles."""

    key = "creative"
    style = TemplateStyle(
        family="Helvetica",
        accent=(5, 150, 105),
        rule=(167, 243, 208),
        heading_size=13.0,
        inline_skills=True,
    )

    @property
    def name(self) -> str:
        return "Creative"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        rows = [
            TextRun(
                self.clean_text(full_name(record)),
                size=s.name_size + 2,
                style="B",
                color=WHITE,
                align="C",
            )
        ]
        title = (personal.get("job_title") or "").strip()
        if title:
            rows.append(TextRun(self.clean_text(title), size=s.title_size, color=WHITE, align="C"))
        contact = self._join(personal.get("email"), personal.get("phone"), separator="    ")
        if contact:
            rows.append(
                TextRun(
                    self.clean_text(contact),
                    size=s.body_size - 0.5,
                    color=WHITE,
                    align="C",
                    space_before=8,
                )
            )
        return Block(rows=tuple(rows), family=s.family, padding=22, fill=_BAND, space_after=20)

    def continuation_header(self, record: ResumeRecord, page_number: int) -> Block:
        return self._band_continuation(record, page_number, _BAND)
