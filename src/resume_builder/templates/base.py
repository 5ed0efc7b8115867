"""Abstract base class for pluggable resume style variants."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from resume_builder.constants.layout_constants import (
    MULTI_ITEM_SECTIONS,
    SECTION_TITLES,
    SectionName,
)
from resume_builder.services.resume_data import full_name
from resume_builder.templates.fragment import (
    WHITE,
    Block,
    Color,
    PageFragment,
    Row,
    RuleRow,
    SplitRow,
    TextRun,
)

if TYPE_CHECKING:
    from resume_builder.models.pagination import SectionSlice
    from resume_builder.services.resume_data import ResumeRecord

__all__ = ["ResumeTemplate", "TemplateStyle"]

# Characters outside Latin-1 that have a close equivalent in the core PDF fonts.
_LATIN1_MAP = str.maketrans(
    {
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u2013": "-",
        "\u2014": "-",
        "\u2022": "-",
        "\u2026": "...",
    }
)
_WHITESPACE = re.compile(r"[ \t]+")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})(?:-\d{2})?$")

_MONTH_ABBR = [
    "",
    "Jan.",
    "Feb.",
    "Mar.",
    "Apr.",
    "May",
    "Jun.",
    "Jul.",
    "Aug.",
    "Sep.",
    "Oct.",
    "Nov.",
    "Dec.",
]


@dataclass(frozen=True)
class TemplateStyle:
    """Typography, colours and spacing of a variant."""

    family: str = "Helvetica"
    text: Color = (17, 24, 39)
    muted: Color = (75, 85, 99)
    accent: Color = (17, 24, 39)
    rule: Color | None = (209, 213, 219)
    body_size: float = 10.0
    heading_size: float = 12.5
    name_size: float = 20.0
    title_size: float = 13.0
    section_gap: float = 16.0
    item_gap: float = 12.0
    uppercase_headings: bool = False
    inline_skills: bool = False


class ResumeTemplate(ABC):
    """Interface that every style variant implements.

    Variants only decide how things look. Which sections and items appear
    on a page is decided by the paginator and passed in to
    :meth:`render_page`; variants must not filter or reorder it.
    """

    key: str = ""
    style: TemplateStyle = TemplateStyle()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name shown in the UI."""

    @abstractmethod
    def first_page_header(self, record: ResumeRecord) -> Block:
        """Masthead drawn at the top of page 1."""

    # ------------------------------------------------------------------
    # Overridable building blocks
    # ------------------------------------------------------------------

    def continuation_header(self, record: ResumeRecord, page_number: int) -> Block:
        """Header drawn at the top of every page after the first."""
        s = self.style
        return Block(
            rows=(
                TextRun(
                    self.clean_text(f"{full_name(record)} - Page {page_number}"),
                    size=15,
                    style="B",
                    color=s.text,
                ),
            ),
            family=s.family,
            rule=s.rule,
            space_after=s.section_gap,
        )

    def section_header(self, section: SectionName, *, continuation: bool = False) -> Block:
        """Title block opening a multi-item section on a page."""
        title = SECTION_TITLES[section]
        if continuation:
            title = f"{title} (continued)"
        return Block(rows=self._heading_rows(title), family=self.style.family, space_after=6)

    def section_block(self, record: ResumeRecord, section: SectionName) -> Block:
        """The whole of a single-block section."""
        builders = {
            SectionName.CONTACT: self._contact_rows,
            SectionName.PROFILE: self._profile_rows,
            SectionName.SKILLS: self._skills_rows,
            SectionName.LANGUAGES: self._language_rows,
        }
        try:
            body = builders[section](record)
        except KeyError:
            msg = f"{section!s} is not a single-block section"
            raise ValueError(msg) from None
        return Block(
            rows=(*self._heading_rows(SECTION_TITLES[section]), *body),
            family=self.style.family,
            space_after=self.style.section_gap,
        )

    def item_block(self, record: ResumeRecord, section: SectionName, index: int) -> Block:
        """One experience or education entry."""
        s = self.style
        if section == SectionName.EXPERIENCE:
            entry = record.get("experience", [])[index]
            heading = entry.get("title", "")
            subtitle = self._join(entry.get("company"), entry.get("location"))
            dates = self.format_date_range(
                entry.get("start_date"), entry.get("end_date"), entry.get("current", False)
            )
        elif section == SectionName.EDUCATION:
            entry = record.get("education", [])[index]
            heading = entry.get("degree", "")
            subtitle = self._join(entry.get("institution"), entry.get("location"))
            dates = self.format_date_range(entry.get("start_date"), entry.get("end_date"))
        else:
            msg = f"{section!s} has no individual items"
            raise ValueError(msg)

        rows: list[Row] = [
            SplitRow(
                TextRun(self.clean_text(heading), size=s.body_size + 1, style="B", color=s.text),
                TextRun(self.clean_text(dates), size=s.body_size - 1, color=s.muted),
            )
        ]
        if subtitle:
            rows.append(
                TextRun(self.clean_text(subtitle), size=s.body_size - 0.5, style="B", color=s.muted)
            )
        description = (entry.get("description") or "").strip()
        if description:
            rows.append(
                TextRun(self.clean_text(description), size=s.body_size, color=s.text, space_before=3)
            )
        return Block(rows=tuple(rows), family=s.family, space_after=s.item_gap)

    # ------------------------------------------------------------------
    # Page assembly
    # ------------------------------------------------------------------

    def render_page(
        self,
        record: ResumeRecord,
        sections: Sequence[SectionSlice],
        page_number: int,
        is_first_page: bool,
    ) -> PageFragment:
        """Return the styled content of one page.

        Pure: the same inputs always produce an equal fragment.
        """
        if is_first_page:
            header = self.first_page_header(record)
        else:
            header = self.continuation_header(record, page_number)

        body: list[Block] = []
        for section_slice in sections:
            if section_slice.name in MULTI_ITEM_SECTIONS:
                if not section_slice.items:
                    continue
                body.append(
                    self.section_header(
                        section_slice.name, continuation=section_slice.is_continuation
                    )
                )
                body.extend(
                    self.item_block(record, section_slice.name, index)
                    for index in section_slice.items
                )
            else:
                body.append(self.section_block(record, section_slice.name))

        return PageFragment(
            page_number=page_number,
            is_first_page=is_first_page,
            header=header,
            body=tuple(body),
        )

    # ------------------------------------------------------------------
    # Section bodies
    # ------------------------------------------------------------------

    def _heading_rows(self, title: str) -> tuple[Row, ...]:
        s = self.style
        text = title.upper() if s.uppercase_headings else title
        heading = TextRun(self.clean_text(text), size=s.heading_size, style="B", color=s.accent)
        if s.rule is None:
            return (heading,)
        return (heading, RuleRow(s.rule))

    def _contact_rows(self, record: ResumeRecord) -> list[Row]:
        personal = record.get("personal", {})
        labels = (
            ("address", "Address"),
            ("email", "Email"),
            ("phone", "Phone"),
            ("website", "Website"),
        )
        return [
            TextRun(
                self.clean_text(f"{label}: {personal[key].strip()}"),
                size=self.style.body_size,
                color=self.style.text,
            )
            for key, label in labels
            if (personal.get(key) or "").strip()
        ]

    def _profile_rows(self, record: ResumeRecord) -> list[Row]:
        bio = (record.get("personal", {}).get("bio") or "").strip()
        return [TextRun(self.clean_text(bio), size=self.style.body_size, color=self.style.text)]

    def _skills_rows(self, record: ResumeRecord) -> list[Row]:
        s = self.style
        skills = [skill.strip() for skill in record.get("skills", []) if skill.strip()]
        if s.inline_skills:
            return [TextRun(self.clean_text(" | ".join(skills)), size=s.body_size, color=s.text)]
        return [
            TextRun(self.clean_text(f"- {skill}"), size=s.body_size, color=s.text)
            for skill in skills
        ]

    def _language_rows(self, record: ResumeRecord) -> list[Row]:
        rows: list[Row] = []
        for entry in record.get("languages", []):
            language = (entry.get("language") or "").strip()
            if not language:
                continue
            proficiency = (entry.get("proficiency") or "").strip()
            text = f"{language} - {proficiency}" if proficiency else language
            rows.append(
                TextRun(self.clean_text(text), size=self.style.body_size, color=self.style.text)
            )
        return rows

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    def _band_continuation(
        self, record: ResumeRecord, page_number: int, fill: Color, *, padding: float = 14
    ) -> Block:
        """Continuation header drawn as a solid colour band."""
        return Block(
            rows=(
                TextRun(
                    self.clean_text(f"{full_name(record)} - Page {page_number}"),
                    size=15,
                    style="B",
                    color=WHITE,
                ),
            ),
            family=self.style.family,
            padding=padding,
            fill=fill,
            space_after=self.style.section_gap,
        )

    @staticmethod
    def clean_text(text: str) -> str:
        """Normalise *text* to what the core PDF fonts can encode.

        Typographic punctuation is mapped to ASCII; any other character
        outside Latin-1 is replaced with ``?``.
        """
        result = text.translate(_LATIN1_MAP)
        result = _WHITESPACE.sub(" ", result)
        return result.encode("latin-1", errors="replace").decode("latin-1")

    @staticmethod
    def _join(*parts: str | None, separator: str = ", ") -> str:
        return separator.join(p.strip() for p in parts if p and p.strip())

    @staticmethod
    def format_date(value: str | None) -> str:
        """Return ``Sep. 2018`` for ISO dates, other values unchanged."""
        if not value:
            return ""
        value = value.strip()
        match = _ISO_DATE.match(value)
        if match:
            month = int(match.group(2))
            if 1 <= month <= 12:
                return f"{_MONTH_ABBR[month]} {match.group(1)}"
        return value

    @classmethod
    def format_date_range(
        cls,
        start: str | None,
        end: str | None,
        is_current: bool = False,
    ) -> str:
        """Return a formatted date range like ``Sep 2018 - Jan 2020``."""
        start_str = cls.format_date(start)
        end_str = "Present" if is_current else cls.format_date(end)

        if start_str and end_str:
            return f"{start_str} - {end_str}"
        return start_str or end_str or ""
