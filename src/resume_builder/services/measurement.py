"""Measure the rendered height of every section and entry of a resume.

Heights are taken on a scratch canvas that shares the surface's geometry
and fonts but is never shown or saved, using the selected variant's
typography. The result is a plain :class:`MeasuredHeights` value the
paginator works on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resume_builder.constants.layout_constants import MULTI_ITEM_SECTIONS
from resume_builder.models.errors import MeasurementNotReadyError
from resume_builder.models.pagination import MeasuredHeights
from resume_builder.services.resume_data import build_sections
from resume_builder.templates.fragment import measure_block

if TYPE_CHECKING:
    from resume_builder.models.pagination import LayoutContext
    from resume_builder.services.resume_data import ResumeRecord
    from resume_builder.services.surface import RenderSurface
    from resume_builder.templates.base import ResumeTemplate

__all__ = ["ContentMeasurer"]

logger = logging.getLogger(__name__)

# Widest plausible page number, so the continuation reserve is never short.
_SAMPLE_PAGE_NUMBER = 999


class ContentMeasurer:
    """Produces :class:`MeasuredHeights`, caching the most recent result.

    The cache is valid for one record object under one layout context
    (page geometry, fonts and style variant). Records are replaced, never
    mutated, so identity is a sufficient key.
    """

    def __init__(self) -> None:
        self._cached_record: ResumeRecord | None = None
        self._cached_context: LayoutContext | None = None
        self._cached_heights: MeasuredHeights | None = None
        self.passes = 0

    def invalidate(self) -> None:
        self._cached_record = None
        self._cached_context = None
        self._cached_heights = None

    def measure(
        self,
        record: ResumeRecord,
        template: ResumeTemplate,
        surface: RenderSurface,
    ) -> MeasuredHeights:
        """Return the height of every block of *record* rendered with *template*.

        Raises:
            MeasurementNotReadyError: If *surface* is not mounted yet.
            SurfaceBusyError: If another operation owns *surface*.
        """
        if not surface.is_mounted:
            raise MeasurementNotReadyError("Render surface is not mounted")

        context = surface.context(template.key)
        if (
            self._cached_heights is not None
            and record is self._cached_record
            and context == self._cached_context
        ):
            logger.debug("Reusing measurement for template %s", template.key)
            return self._cached_heights

        with surface.claim("measurement"):
            heights = self._measure(record, template, surface, context)

        self.passes += 1
        self._cached_record = record
        self._cached_context = context
        self._cached_heights = heights
        return heights

    def _measure(
        self,
        record: ResumeRecord,
        template: ResumeTemplate,
        surface: RenderSurface,
        context: LayoutContext,
    ) -> MeasuredHeights:
        pdf = surface.new_canvas()
        width = surface.content_width

        blocks = {}
        items = {}
        headers = {}
        for section in build_sections(record):
            if section.name in MULTI_ITEM_SECTIONS:
                headers[section.name] = max(
                    measure_block(pdf, template.section_header(section.name), width),
                    measure_block(
                        pdf, template.section_header(section.name, continuation=True), width
                    ),
                )
                items[section.name] = tuple(
                    measure_block(pdf, template.item_block(record, section.name, index), width)
                    for index in range(section.item_count)
                )
            else:
                blocks[section.name] = measure_block(
                    pdf, template.section_block(record, section.name), width
                )

        first_header = measure_block(pdf, template.first_page_header(record), width)
        continuation_header = measure_block(
            pdf, template.continuation_header(record, _SAMPLE_PAGE_NUMBER), width
        )
        logger.debug(
            "Measured %d blocks and %d entries at width %.1f (%s)",
            len(blocks),
            sum(len(v) for v in items.values()),
            width,
            template.key,
        )
        return MeasuredHeights(
            blocks=blocks,
            items=items,
            headers=headers,
            first_page_header=first_header,
            continuation_page_header=continuation_header,
            context=context,
        )
