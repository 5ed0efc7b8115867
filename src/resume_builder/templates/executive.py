"""Executive resume template.

Serif type on a near-black masthead: name and title on the left, contact
details right-aligned. Section titles are set in capitals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.resume_data import full_name
from resume_builder.templates.base import ResumeTemplate, TemplateStyle
from resume_builder.templates.fragment import WHITE, Block, SplitRow, TextRun

if TYPE_CHECKING:
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["ExecutiveResumeTemplate"]

_BAND = (17, 24, 39)
_BAND_MUTED = (209, 213, 219)


class ExecutiveResumeTemplate(ResumeTemplate):
    """Formal serif layout for senior roles."""

    key = "executive"
    style = TemplateStyle(
        family="Times",
        accent=(17, 24, 39),
        rule=(156, 163, 175),
        body_size=10.5,
        heading_size=12.0,
        uppercase_headings=True,
    )

    @property
    def name(self) -> str:
        return "Executive"

    def first_page_header(self, record: ResumeRecord) -> Block:
        s = self.style
        personal = record.get("personal", {})
        small = s.body_size - 1

        def _right(key: str) -> TextRun:
            return TextRun(
                self.clean_text((personal.get(key) or "").strip()),
                size=small,
                color=WHITE,
                align="R",
            )

        rows = (
            SplitRow(
                TextRun(self.clean_text(full_name(record)), size=s.name_size, style="B", color=WHITE),
                _right("email"),
            ),
            SplitRow(
                TextRun(
                    self.clean_text((personal.get("job_title") or "").strip()),
                    size=s.title_size,
                    color=_BAND_MUTED,
                ),
                _right("phone"),
            ),
            SplitRow(TextRun(""), _right("address")),
        )
        return Block(rows=rows, family=s.family, padding=20, fill=_BAND, space_after=20)

    def continuation_header(self, record: ResumeRecord, page_number: int) -> Block:
        return self._band_continuation(record, page_number, _BAND)
