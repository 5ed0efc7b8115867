"""Data structures flowing between the measurer, the paginator and the renderers.

``MeasuredHeights`` and ``PageAssignment`` are derived values. They are
never persisted and are only valid for the :class:`LayoutContext` they
were computed under.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from resume_builder.constants.layout_constants import MULTI_ITEM_SECTIONS, SectionName

__all__ = [
    "LayoutContext",
    "MeasuredHeights",
    "PageAssignment",
    "PageLayout",
    "Section",
    "SectionSlice",
]

# Slack for float sums when comparing against capacity.
_EPSILON = 1e-6


@dataclass(frozen=True)
class Section:
    """A named section and how many atomic items it holds.

    Single-block sections always have ``item_count == 1``.
    """

    name: SectionName
    item_count: int = 1

    @property
    def is_multi_item(self) -> bool:
        return self.name in MULTI_ITEM_SECTIONS


@dataclass(frozen=True)
class LayoutContext:
    """Conditions a measurement was taken under.

    Two layouts agree pixel-for-pixel only when their contexts are equal.
    """

    page_width: float
    page_height: float
    margin: float
    template_key: str
    font_signature: tuple[str, ...] = ()

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin


@dataclass(frozen=True)
class MeasuredHeights:
    """Rendered heights of every block of one resume under one context."""

    blocks: Mapping[SectionName, float] = field(default_factory=dict)
    items: Mapping[SectionName, tuple[float, ...]] = field(default_factory=dict)
    headers: Mapping[SectionName, float] = field(default_factory=dict)
    first_page_header: float = 0.0
    continuation_page_header: float = 0.0
    context: LayoutContext | None = None

    def block_height(self, section: SectionName) -> float | None:
        return self.blocks.get(section)

    def item_height(self, section: SectionName, index: int) -> float | None:
        heights = self.items.get(section, ())
        if 0 <= index < len(heights):
            return heights[index]
        return None

    def header_height(self, section: SectionName) -> float | None:
        return self.headers.get(section)


@dataclass(frozen=True)
class SectionSlice:
    """The part of one section that lands on one page."""

    name: SectionName
    items: tuple[int, ...]
    is_continuation: bool = False

    def to_dict(self) -> dict:
        return {
            "section": self.name.value,
            "items": list(self.items),
            "is_continuation": self.is_continuation,
        }


@dataclass(frozen=True)
class PageLayout:
    """Content window of a single physical page."""

    page_number: int
    sections: tuple[SectionSlice, ...]
    used_height: float = 0.0
    capacity: float = 0.0

    @property
    def overflow(self) -> bool:
        """Whether placed content exceeds the page's capacity."""
        return self.capacity > 0 and self.used_height > self.capacity + _EPSILON

    def section(self, name: SectionName) -> SectionSlice | None:
        for section_slice in self.sections:
            if section_slice.name == name:
                return section_slice
        return None

    def to_dict(self) -> dict:
        return {
            "page_number": self.page_number,
            "sections": [s.to_dict() for s in self.sections],
            "used_height": round(self.used_height, 2),
            "capacity": round(self.capacity, 2),
            "overflow": self.overflow,
        }


@dataclass(frozen=True)
class PageAssignment:
    """Ordered mapping of sections and items to pages.

    Every item of every section appears exactly once, in its original
    order.
    """

    pages: tuple[PageLayout, ...]
    is_fallback: bool = False
    context: LayoutContext | None = None

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[PageLayout]:
        return iter(self.pages)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def page(self, page_number: int) -> PageLayout:
        """Return the page with 1-indexed *page_number*.

        Raises:
            IndexError: If the page does not exist.
        """
        if not 1 <= page_number <= len(self.pages):
            msg = f"Page {page_number} out of range (1..{len(self.pages)})"
            raise IndexError(msg)
        return self.pages[page_number - 1]

    def flatten(self) -> dict[SectionName, list[int]]:
        """Concatenate each section's items across pages, in page order."""
        result: dict[SectionName, list[int]] = {}
        for page in self.pages:
            for section_slice in page.sections:
                result.setdefault(section_slice.name, []).extend(section_slice.items)
        return result

    def to_dict(self) -> dict:
        return {
            "total_pages": self.total_pages,
            "is_fallback": self.is_fallback,
            "pages": [page.to_dict() for page in self.pages],
        }
