from __future__ import annotations

from resume_builder.constants.layout_constants import (
    A4_HEIGHT_PX,
    A4_WIDTH_PX,
    CANONICAL_ORDER,
    MULTI_ITEM_SECTIONS,
    PAGE_MARGIN_PX,
    PX_UNIT,
    SINGLE_BLOCK_SECTIONS,
    SectionName,
    page_height_for_width,
)

__all__ = [
    "A4_HEIGHT_PX",
    "A4_WIDTH_PX",
    "CANONICAL_ORDER",
    "MULTI_ITEM_SECTIONS",
    "PAGE_MARGIN_PX",
    "PX_UNIT",
    "SINGLE_BLOCK_SECTIONS",
    "SectionName",
    "page_height_for_width",
]
