"""Academic resume template.

Centred serif masthead in the style of a CV: name, title, postal address
and a single email / phone line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import Block, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["AcademicResumeTemplate"]


class AcademicResumeTemplate(ResumeTemplate):
    """Traditional curriculum-vitae layout."""

    key = "academic"
    style = TemplateStyle(
        family="Times",
        rule=(229, 231, 235),
        body_size=10.5,
        item_gap=10.0,
    )

    @property
    def name(self) -> str:
        return "Academic"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        rows = [
            TextRun(
                self.clean_text(full_name(record)),
                size=s.name_size,
                style="B",
                color=s.text,
                align="C",
            )
        ]
        title = (personal.get("job_title") or "").strip()
        if title:
            rows.append(TextRun(self.clean_text(title), size=s.title_size, color=s.text, align="C"))
        address = (personal.get("address") or "").strip()
        if address:
            rows.append(
                TextRun(
                    self.clean_text(address),
                    size=s.body_size - 0.5,
                    color=s.text,
                    align="C",
                    space_before=4,
                )
            )
        contact = self._join(personal.get("email"), personal.get("phone"), separator=" | ")
        if contact:
            rows.append(
                TextRun(self.clean_text(contact), size=s.body_size - 0.5, color=s.text, align="C")
            )
        return Block(rows=tuple(rows), family=s.family, rule=s.rule, space_after=18)

    def continuation_header(self, record: ResumeRecord, page_number: int) -> Block:
        s = self.style
        return Block(
            rows=(
                TextRun(
                    self.clean_text(f"{full_name(record)} - Page {page_number}"),
                    size=15,
                    style="B",
                    color=s.text,
                    align="C",
                ),
            ),
            family=s.family,
            rule=s.rule,
            space_after=s.section_gap,
        )
