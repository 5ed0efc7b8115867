"""Resume layout and export routes for the API.

Each request lays the resume out on its own render surface, so requests
never contend for one another's surface.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, NamedTuple

from fastapi import APIRouter, HTTPException, status
from fastapi import Path as PathParam
from fastapi.responses import Response

from resume_builder.api.schemas.resumes import LayoutRequest, LayoutResponse
from resume_builder.models.errors import (
    ExportCancelledError,
    ExportDivergenceError,
    ExportEncodingError,
)
from resume_builder.models.pagination import PageAssignment
from resume_builder.services.export import ExportPipeline, resume_filename
from resume_builder.services.layout import compute_layout
from resume_builder.services.resume_data import ResumeRecord, completion_progress
from resume_builder.services.surface import RenderSurface, grayscale
from resume_builder.templates import get_template
from resume_builder.templates.base import ResumeTemplate

router = APIRouter(prefix="/resumes", tags=["resumes"])

logger = logging.getLogger(__name__)

_PDF_RESPONSE = {200: {"content": {"application/pdf": {}}}}


class _Layout(NamedTuple):
    record: ResumeRecord
    template: ResumeTemplate
    surface: RenderSurface
    assignment: PageAssignment


def _lay_out(data: LayoutRequest) -> _Layout:
    record = data.record.to_record()
    template = get_template(data.template)
    surface = RenderSurface()
    assignment = compute_layout(record, template, surface)
    return _Layout(record, template, surface, assignment)


@contextmanager
def _export_errors() -> Iterator[None]:
    """Translate export failures into HTTP errors."""
    try:
        yield
    except ExportEncodingError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ExportEncodingError.user_message,
        ) from exc
    except ExportCancelledError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ExportDivergenceError as exc:
        logger.error("Export refused: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Layout changed during export, please try again.",
        ) from exc


@router.post("/paginate", response_model=LayoutResponse)
def paginate_resume(data: LayoutRequest) -> LayoutResponse:
    """Return the page assignment of a resume for the given style variant."""
    layout = _lay_out(data)
    return LayoutResponse(
        template=layout.template.key,
        completion=completion_progress(layout.record),
        **layout.assignment.to_dict(),
    )


@router.post("/pages/{page_number}", responses=_PDF_RESPONSE)
def render_page(
    page_number: Annotated[int, PathParam(description="1-indexed page number", ge=1)],
    data: LayoutRequest,
) -> Response:
    """Render a single page of the resume as a one-page PDF."""
    layout = _lay_out(data)
    if page_number > layout.assignment.total_pages:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Page {page_number} not found ({layout.assignment.total_pages} pages)",
        )

    with _export_errors():
        content = ExportPipeline(layout.surface).render_page_pdf(
            layout.assignment, layout.record, layout.template, page_number
        )
    return Response(content=content, media_type="application/pdf")


@router.post("/export", responses=_PDF_RESPONSE)
def export_resume(data: LayoutRequest) -> Response:
    """Generate and download the paginated resume as a PDF."""
    layout = _lay_out(data)
    with _export_errors():
        content = ExportPipeline(layout.surface).export_document(
            layout.assignment,
            layout.record,
            layout.template,
            color_transform=grayscale if data.grayscale else None,
        )

    filename = resume_filename(layout.record)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Total-Pages": str(layout.assignment.total_pages),
        },
    )
