"""Measure and paginate a resume in one step."""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_builder.services.measurement import ContentMeasurer
from resume_builder.services.paginator import paginate
from resume_builder.services.resume_data import build_sections

if TYPE_CHECKING:
    from resume_builder.models.pagination import MeasuredHeights, PageAssignment
    from resume_builder.services.resume_data import ResumeRecord
    from resume_builder.services.surface import RenderSurface
    from resume_builder.templates.base import ResumeTemplate

__all__ = ["compute_layout", "paginate_measured"]


def paginate_measured(
    record: ResumeRecord,
    heights: MeasuredHeights,
    surface: RenderSurface,
) -> PageAssignment:
    """Paginate *record* using heights measured on *surface*."""
    return paginate(
        build_sections(record),
        heights,
        surface.content_height,
        heights.first_page_header,
        heights.continuation_page_header,
        context=heights.context,
    )


def compute_layout(
    record: ResumeRecord,
    template: ResumeTemplate,
    surface: RenderSurface,
    *,
    measurer: ContentMeasurer | None = None,
) -> PageAssignment:
    """Return the page assignment of *record* rendered with *template*.

    Raises:
        MeasurementNotReadyError: If *surface* is not mounted yet.
        SurfaceBusyError: If another operation owns *surface*.
    """
    measurer = measurer or ContentMeasurer()
    heights = measurer.measure(record, template, surface)
    return paginate_measured(record, heights, surface)
