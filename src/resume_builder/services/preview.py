"""Interactive preview state for the resume editor.

The controller holds the record being edited, the selected style
variant and the page the user is looking at. Edits arrive as whole
replacement records through :meth:`PreviewController.on_change`; bursts
of edits are coalesced on the running event loop into a single
measure-and-paginate pass. Export and print reuse the assignment the
preview is showing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from fpdf.errors import FPDFException

from resume_builder.config import get_settings
from resume_builder.models.errors import (
    ExportDivergenceError,
    MeasurementNotReadyError,
    SurfaceBusyError,
)
from resume_builder.services.export import ExportPipeline
from resume_builder.services.layout import paginate_measured
from resume_builder.services.measurement import ContentMeasurer
from resume_builder.services.paginator import fallback_assignment
from resume_builder.services.resume_data import build_sections, sample_resume
from resume_builder.services.surface import RenderSurface
from resume_builder.templates import get_template

if TYPE_CHECKING:
    from resume_builder.models.pagination import PageAssignment
    from resume_builder.services.resume_data import ResumeRecord
    from resume_builder.services.surface import ColorTransform
    from resume_builder.templates.base import ResumeTemplate
    from resume_builder.templates.fragment import PageFragment

__all__ = ["PreviewController"]

logger = logging.getLogger(__name__)


class PreviewController:
    """Keeps the page assignment of the edited resume up to date.

    Args:
        surface: Render surface shared with measurement and export.
        record: Initial record; the editor's placeholder resume if omitted.
        template: Initial style variant key; unknown keys use the default.
        on_pages_change: Called with the new page count whenever it changes.
        coalesce_seconds: Quiet period before a burst of edits is applied.
    """

    def __init__(
        self,
        surface: RenderSurface | None = None,
        record: ResumeRecord | None = None,
        template: str | None = None,
        *,
        on_pages_change: Callable[[int], None] | None = None,
        coalesce_seconds: float | None = None,
        measurer: ContentMeasurer | None = None,
    ) -> None:
        self._surface = surface or RenderSurface()
        self._record = record if record is not None else sample_resume()
        self._template = get_template(template)
        self._on_pages_change = on_pages_change
        self._delay = (
            coalesce_seconds
            if coalesce_seconds is not None
            else get_settings().coalesce_seconds
        )
        self._measurer = measurer or ContentMeasurer()
        self._exporter = ExportPipeline(self._surface)

        self._pending: asyncio.TimerHandle | None = None
        self._waiting_for_mount = False
        self._stale = True
        self._generation = 0
        self._current_page = 1
        self._reported_total: int | None = None
        # Shown until the first measurement lands; export refuses it.
        self._assignment = fallback_assignment(build_sections(self._record))

        self._surface.add_mount_listener(self._on_mount)
        self.refresh()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def record(self) -> ResumeRecord:
        return self._record

    @property
    def template(self) -> ResumeTemplate:
        return self._template

    @property
    def surface(self) -> RenderSurface:
        return self._surface

    @property
    def assignment(self) -> PageAssignment:
        return self._assignment

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return self._assignment.total_pages

    @property
    def is_stale(self) -> bool:
        """True while the shown assignment lags behind the latest input."""
        return self._stale

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_change(self, record: ResumeRecord) -> None:
        """Replace the edited record; the layout follows after a quiet period."""
        self._record = record
        self._invalidate()
        self._schedule()

    def select_template(self, key: str | None) -> None:
        """Switch style variant and re-layout immediately."""
        self._template = get_template(key)
        self._invalidate()
        self.flush()

    def set_page_width(self, page_width: float) -> None:
        """Resize the surface and re-layout immediately."""
        self._surface.resize(page_width)
        self._invalidate()
        self.flush()

    def close(self) -> None:
        """Drop pending work and abandon any export in flight."""
        self._cancel_pending()
        self._generation += 1

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def flush(self) -> PageAssignment:
        """Apply any coalesced edit now."""
        self._cancel_pending()
        return self.refresh()

    def refresh(self) -> PageAssignment:
        """Measure and paginate the current record.

        Measurement that cannot run yet is deferred and the previous
        assignment stays on screen. Content that cannot be measured at
        all, such as text on a page too narrow for a single character,
        is shown unpaginated on one page.
        """
        record = self._record
        try:
            heights = self._measurer.measure(record, self._template, self._surface)
        except MeasurementNotReadyError:
            logger.debug("Render surface not mounted; refresh waits for mount")
            self._waiting_for_mount = True
            return self._assignment
        except SurfaceBusyError as exc:
            logger.debug("Refresh deferred: surface owned by %s", exc.owner)
            self._rearm()
            return self._assignment
        except FPDFException as exc:
            logger.warning("Measurement failed, showing everything on one page: %s", exc)
            self._apply(
                fallback_assignment(
                    build_sections(record),
                    context=self._surface.context(self._template.key),
                    capacity=self._surface.content_height,
                )
            )
            return self._assignment

        self._apply(paginate_measured(record, heights, self._surface))
        return self._assignment

    def _apply(self, assignment: PageAssignment) -> None:
        self._assignment = assignment
        self._stale = False

        total = assignment.total_pages
        if self._current_page > total:
            logger.debug("Clamping current page %d to %d", self._current_page, total)
            self._current_page = total
        if total != self._reported_total:
            self._reported_total = total
            if self._on_pages_change is not None:
                self._on_pages_change(total)

    def _invalidate(self) -> None:
        self._stale = True
        self._generation += 1

    def _schedule(self) -> None:
        if not self._rearm():
            self.refresh()

    def _rearm(self) -> bool:
        """Start or restart the coalescing timer; False without an event loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        if self._pending is not None:
            logger.debug("Coalescing update into pending refresh")
            self._pending.cancel()
        self._pending = loop.call_later(self._delay, self._run_pending)
        return True

    def _run_pending(self) -> None:
        self._pending = None
        self.refresh()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_mount(self) -> None:
        if self._waiting_for_mount:
            self._waiting_for_mount = False
            self.refresh()

    # ------------------------------------------------------------------
    # Navigation and rendering
    # ------------------------------------------------------------------

    def go_to_page(self, page_number: int) -> int:
        """Show *page_number*, kept within ``1..total_pages``."""
        self._current_page = min(max(page_number, 1), self.total_pages)
        return self._current_page

    def next_page(self) -> int:
        return self.go_to_page(self._current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self._current_page - 1)

    def render_current_page(self) -> PageFragment:
        """Return the styled fragment of the page being shown."""
        page = self._assignment.page(self._current_page)
        return self._template.render_page(
            self._record, page.sections, page.page_number, page.page_number == 1
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _ready_for_output(self) -> PageAssignment:
        self.flush()
        if self._stale:
            raise ExportDivergenceError("Preview has not caught up with the latest edits")
        return self._assignment

    async def export(self, *, color_transform: ColorTransform | None = None) -> bytes:
        """Export the shown assignment as a PDF.

        Raises:
            ExportCancelledError: If the record, variant or page width
                changes, or the controller is closed, before it finishes.
        """
        assignment = self._ready_for_output()
        generation = self._generation
        return await self._exporter.export_document_async(
            assignment,
            self._record,
            self._template,
            color_transform=color_transform,
            is_cancelled=lambda: self._generation != generation,
        )

    def print_current(
        self,
        *,
        printer: str | None = None,
        color_transform: ColorTransform | None = None,
    ) -> str:
        """Send the shown assignment to the platform print facility."""
        assignment = self._ready_for_output()
        return self._exporter.print_document(
            assignment,
            self._record,
            self._template,
            printer=printer,
            color_transform=color_transform,
        )
