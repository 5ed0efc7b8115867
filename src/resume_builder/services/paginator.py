"""Greedy, order-preserving page breaking.

Sections are walked in canonical order and atomic units (a whole
single-block section, or one experience / education entry) are placed
first-fit: a unit goes on the current page if it fits, including an
exact fit, and otherwise opens the next page. Units are never split or
reordered. A unit taller than a whole page is still placed, alone on
its page, and the page is reported as overflowing.

A multi-item section only opens on a page when its header and its first
entry fit together, so headers are never stranded at the bottom of a
page. When a section runs onto a new page its header is repeated there
as a continuation header.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from resume_builder.constants.layout_constants import CANONICAL_ORDER, SectionName
from resume_builder.models.pagination import (
    LayoutContext,
    MeasuredHeights,
    PageAssignment,
    PageLayout,
    Section,
    SectionSlice,
)

__all__ = ["fallback_assignment", "paginate"]

logger = logging.getLogger(__name__)

_EPSILON = 1e-6


def _valid_height(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


def _ordered(sections: Sequence[Section]) -> list[Section]:
    rank = {name: index for index, name in enumerate(CANONICAL_ORDER)}
    return sorted(sections, key=lambda section: rank[section.name])


def _measurement_gap(
    sections: Sequence[Section],
    heights: MeasuredHeights | None,
    values: Sequence[float],
) -> str | None:
    """Return why pagination cannot trust its inputs, or None if it can.

    *values* is (capacity, first-page reserve, continuation reserve).
    """
    if heights is None:
        return "no measurement available"
    if not all(math.isfinite(v) and v >= 0 for v in values):
        return "invalid capacity or header reserve"
    if values[0] <= 0:
        return "page has no capacity"
    seen: set[SectionName] = set()
    for section in sections:
        if section.name in seen:
            return f"section {section.name!s} listed twice"
        seen.add(section.name)
        if section.item_count < 0:
            return f"section {section.name!s} has a negative item count"
        if section.item_count == 0:
            continue
        if section.is_multi_item:
            if not _valid_height(heights.header_height(section.name)):
                return f"missing header height for {section.name!s}"
            for index in range(section.item_count):
                if not _valid_height(heights.item_height(section.name, index)):
                    return f"missing height for {section.name!s}[{index}]"
        elif not _valid_height(heights.block_height(section.name)):
            return f"missing height for {section.name!s}"
    return None


def fallback_assignment(
    sections: Sequence[Section],
    *,
    context: LayoutContext | None = None,
    capacity: float = 0.0,
) -> PageAssignment:
    """Place everything on a single page, unpaginated."""
    slices = tuple(
        SectionSlice(section.name, tuple(range(section.item_count)))
        for section in _ordered(sections)
        if section.item_count > 0
    )
    page = PageLayout(page_number=1, sections=slices, used_height=0.0, capacity=capacity)
    return PageAssignment(pages=(page,), is_fallback=True, context=context)


@dataclass
class _OpenPage:
    number: int
    used: float
    slices: list[tuple[SectionName, list[int], bool]] = field(default_factory=list)
    has_content: bool = False

    def holds(self, name: SectionName) -> bool:
        return bool(self.slices) and self.slices[-1][0] == name


class _PageBuilder:
    def __init__(self, capacity: float, reserve_top: float, reserve_continuation: float) -> None:
        self.capacity = capacity
        self.reserve_continuation = reserve_continuation
        self.pages: list[PageLayout] = []
        self.current = _OpenPage(number=1, used=reserve_top)

    def fits(self, height: float) -> bool:
        return self.current.used + height <= self.capacity + _EPSILON

    def break_page(self) -> None:
        self._close()
        self.current = _OpenPage(number=self.current.number + 1, used=self.reserve_continuation)

    def open_section(self, name: SectionName, header: float, *, continuation: bool) -> None:
        self.current.slices.append((name, [], continuation))
        self.current.used += header

    def place(self, index: int, height: float) -> None:
        self.current.slices[-1][1].append(index)
        self.current.used += height
        self.current.has_content = True

    def _close(self) -> None:
        page = PageLayout(
            page_number=self.current.number,
            sections=tuple(
                SectionSlice(name, tuple(items), continuation)
                for name, items, continuation in self.current.slices
            ),
            used_height=self.current.used,
            capacity=self.capacity,
        )
        if page.overflow:
            logger.warning(
                "Page %d overflows: %.1fpx of content in %.1fpx",
                page.page_number,
                page.used_height,
                page.capacity,
            )
        self.pages.append(page)

    def finish(self, context: LayoutContext | None) -> PageAssignment:
        self._close()
        return PageAssignment(pages=tuple(self.pages), context=context)


def paginate(
    sections: Sequence[Section],
    heights: MeasuredHeights | None,
    page_capacity: float,
    header_reserve_top: float,
    header_reserve_continuation: float,
    *,
    context: LayoutContext | None = None,
) -> PageAssignment:
    """Assign every item of *sections* to a page.

    Args:
        sections: Sections to place; walked in canonical order.
        heights: Measured heights of every header, block and entry.
        page_capacity: Usable content height of a page.
        header_reserve_top: Height taken by the page-1 masthead.
        header_reserve_continuation: Height taken by later page headers.
        context: Layout context recorded on the result.

    Returns:
        The page assignment. If *heights* does not cover every section
        and entry, a single-page fallback with ``is_fallback`` set.
    """
    ordered = _ordered(sections)
    gap = _measurement_gap(
        ordered, heights, (page_capacity, header_reserve_top, header_reserve_continuation)
    )
    if gap is not None:
        logger.warning("Pagination fallback: %s", gap)
        return fallback_assignment(ordered, context=context, capacity=page_capacity)

    builder = _PageBuilder(page_capacity, header_reserve_top, header_reserve_continuation)
    for section in ordered:
        if section.item_count == 0:
            continue
        if section.is_multi_item:
            header = heights.header_height(section.name)
            for index in range(section.item_count):
                item = heights.item_height(section.name, index)
                needed = item if builder.current.holds(section.name) else header + item
                if not builder.fits(needed) and builder.current.has_content:
                    builder.break_page()
                if not builder.current.holds(section.name):
                    builder.open_section(section.name, header, continuation=index > 0)
                builder.place(index, item)
        else:
            block = heights.block_height(section.name)
            if not builder.fits(block) and builder.current.has_content:
                builder.break_page()
            builder.open_section(section.name, 0.0, continuation=False)
            builder.place(0, block)

    return builder.finish(context)
