"""Professional resume template.

Sans-serif, left-aligned masthead with the job title underneath and a
light rule beneath every section title. The default variant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import Block, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["ProfessionalResumeTemplate"]


class ProfessionalResumeTemplate(ResumeTemplate):
    """Clean, ATS-friendly layout."""

    key = "professional"
    style = TemplateStyle(
        family="Helvetica",
        rule=(229, 231, 235),
        muted=(75, 85, 99),
    )

    @property
    def name(self) -> str:
        return "Professional"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        rows = [TextRun(self.clean_text(full_name(record)), size=s.name_size, style="B", color=s.text)]
        title = (personal.get("job_title") or "").strip()
        if title:
            rows.append(TextRun(self.clean_text(title), size=s.title_size, color=s.muted))
        return Block(
            rows=tuple(rows),
            family=s.family,
            rule=(209, 213, 219),
            space_after=20,
        )
