"""Minimal resume template.

No colour, no bands: name, title and a single contact line above a hairline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import Block, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["MinimalResumeTemplate"]


class MinimalResumeTemplate(ResumeTemplate):
    """Whitespace-driven layout without section rules."""

    key = "minimal"
    style = TemplateStyle(
        family="Helvetica",
        accent=(55, 65, 81),
        rule=None,
        heading_size=11.5,
        section_gap=14.0,
        item_gap=10.0,
    )

    @property
    def name(self) -> str:
        return "Minimal"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        rows = [TextRun(self.clean_text(full_name(record)), size=s.name_size, style="B", color=s.text)]
        title = (personal.get("job_title") or "").strip()
        if title:
            rows.append(TextRun(self.clean_text(title), size=s.body_size + 1, color=s.muted))
        contact = self._join(
            personal.get("email"),
            personal.get("phone"),
            personal.get("address"),
            separator="    ",
        )
        if contact:
            rows.append(
                TextRun(self.clean_text(contact), size=s.body_size - 1, color=s.muted, space_before=4)
            )
        return Block(rows=tuple(rows), family=s.family, rule=(229, 231, 235), space_after=18)
