"""Turn a page assignment into a downloadable PDF or a print job.

Export never paginates. It replays the assignment the preview is
showing, on the same surface geometry and fonts, after checking that
those conditions have not changed since the assignment was computed.
Each page is encoded as its own one-page document and appended to the
output in page order.
"""

from __future__ import annotations

import asyncio
import atexit
import logging
import os
import re
import shlex
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING

from fpdf.errors import FPDFException
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from resume_builder.config import get_settings
from resume_builder.models.errors import (
    ExportCancelledError,
    ExportDivergenceError,
    ExportEncodingError,
    PrintUnavailableError,
)
from resume_builder.services.resume_data import full_name
from resume_builder.templates.fragment import draw_fragment

if TYPE_CHECKING:
    from resume_builder.models.pagination import PageAssignment, PageLayout
    from resume_builder.services.resume_data import ResumeRecord
    from resume_builder.services.surface import ColorTransform, RenderSurface
    from resume_builder.templates.base import ResumeTemplate

__all__ = ["ExportPipeline", "resume_filename"]

logger = logging.getLogger(__name__)

_ENCODING_ERRORS = (FPDFException, PyPdfError, UnicodeEncodeError)


def _sanitize_filename(name: str) -> str:
    """Remove or replace characters that are invalid in filenames."""
    sanitized = re.sub(r'[<>:"/\\|?*\s]', "_", name)
    return sanitized.strip("._ ")


def resume_filename(record: ResumeRecord) -> str:
    """Return ``First_Last_Resume.pdf`` for *record*."""
    personal = record.get("personal", {})
    parts = [
        _sanitize_filename(personal.get("first_name") or ""),
        _sanitize_filename(personal.get("last_name") or ""),
    ]
    stem = "_".join(p for p in parts if p)
    return f"{stem}_Resume.pdf" if stem else "Resume.pdf"


class ExportPipeline:
    """Renders page assignments of one surface into PDF documents."""

    def __init__(self, surface: RenderSurface) -> None:
        self._surface = surface

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def export_document(
        self,
        assignment: PageAssignment,
        record: ResumeRecord,
        template: ResumeTemplate,
        *,
        color_transform: ColorTransform | None = None,
    ) -> bytes:
        """Return a PDF with one physical page per page of *assignment*.

        Raises:
            ExportDivergenceError: If the surface no longer matches the
                conditions *assignment* was computed under.
            ExportEncodingError: If a page cannot be encoded.
            SurfaceBusyError: If another operation owns the surface.
        """
        self._check_context(assignment, template)
        with self._scope("export", color_transform):
            writer = PdfWriter()
            for page in assignment:
                self._append(writer, self._encode_page(page, record, template))
            return self._finish(writer, record, assignment)

    async def export_document_async(
        self,
        assignment: PageAssignment,
        record: ResumeRecord,
        template: ResumeTemplate,
        *,
        color_transform: ColorTransform | None = None,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> bytes:
        """Like :meth:`export_document`, yielding to the event loop between pages.

        Raises:
            ExportCancelledError: If *is_cancelled* turns true before the
                document is complete. Nothing is returned in that case.
        """
        self._check_context(assignment, template)
        with self._scope("export", color_transform):
            writer = PdfWriter()
            for page in assignment:
                self._raise_if_cancelled(is_cancelled, page.page_number)
                self._append(writer, self._encode_page(page, record, template))
                await asyncio.sleep(0)
            self._raise_if_cancelled(is_cancelled, None)
            return self._finish(writer, record, assignment)

    def render_page_pdf(
        self,
        assignment: PageAssignment,
        record: ResumeRecord,
        template: ResumeTemplate,
        page_number: int,
    ) -> bytes:
        """Return a one-page PDF of a single page, for previews."""
        self._check_context(assignment, template)
        page = assignment.page(page_number)
        with self._scope("preview", None):
            return self._encode_page(page, record, template)

    def print_document(
        self,
        assignment: PageAssignment,
        record: ResumeRecord,
        template: ResumeTemplate,
        *,
        printer: str | None = None,
        color_transform: ColorTransform | None = None,
    ) -> str:
        """Send the document to the platform's print facility.

        Uses the same assignment the preview shows; there is no separate
        pagination pass.

        Returns:
            The print system's response, usually a job identifier.

        Raises:
            PrintUnavailableError: If there is no usable print command or
                it fails.
        """
        document = self.export_document(
            assignment, record, template, color_transform=color_transform
        )
        return _send_to_printer(document, resume_filename(record), printer)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_context(self, assignment: PageAssignment, template: ResumeTemplate) -> None:
        if assignment.context is None:
            raise ExportDivergenceError("Page assignment has no layout context")
        current = self._surface.context(template.key)
        if current != assignment.context:
            msg = (
                "Layout conditions changed since pagination "
                f"(paginated under {assignment.context}, surface is {current})"
            )
            raise ExportDivergenceError(msg)

    @contextmanager
    def _scope(self, owner: str, color_transform: ColorTransform | None) -> Iterator[None]:
        with self._surface.claim(owner), self._surface.override_colors(color_transform):
            try:
                yield
            except _ENCODING_ERRORS as exc:
                logger.exception("Could not encode resume document")
                raise ExportEncodingError(ExportEncodingError.user_message) from exc

    @staticmethod
    def _raise_if_cancelled(is_cancelled: Callable[[], bool] | None, page: int | None) -> None:
        if is_cancelled is not None and is_cancelled():
            where = f"before page {page}" if page is not None else "before completion"
            logger.info("Export cancelled %s", where)
            raise ExportCancelledError(f"Export cancelled {where}")

    def _encode_page(
        self,
        page: PageLayout,
        record: ResumeRecord,
        template: ResumeTemplate,
    ) -> bytes:
        surface = self._surface
        fragment = template.render_page(
            record, page.sections, page.page_number, page.page_number == 1
        )
        pdf = surface.new_canvas()
        draw_fragment(
            pdf,
            fragment,
            surface.margin,
            surface.margin,
            surface.content_width,
            surface.resolve_color,
        )
        return bytes(pdf.output())

    @staticmethod
    def _append(writer: PdfWriter, page_document: bytes) -> None:
        writer.append(PdfReader(BytesIO(page_document)))

    @staticmethod
    def _finish(writer: PdfWriter, record: ResumeRecord, assignment: PageAssignment) -> bytes:
        name = full_name(record)
        writer.add_metadata(
            {
                "/Title": f"{name} - Resume" if name else "Resume",
                "/Author": name,
                "/Creator": "resume-builder",
            }
        )
        buffer = BytesIO()
        writer.write(buffer)
        data = buffer.getvalue()
        logger.info("Exported %d page(s), %d bytes", assignment.total_pages, len(data))
        return data


def _print_command(printer: str | None) -> list[str]:
    configured = get_settings().print_command
    if configured:
        return shlex.split(configured)
    if shutil.which("lp"):
        return ["lp", "-d", printer] if printer else ["lp"]
    if shutil.which("lpr"):
        return ["lpr", "-P", printer] if printer else ["lpr"]
    raise PrintUnavailableError("No print command found (tried lp and lpr)")


def _send_to_printer(document: bytes, filename: str, printer: str | None) -> str:
    tmp_dir = Path(tempfile.mkdtemp(prefix="resume-print-"))
    path = tmp_dir / filename
    path.write_bytes(document)

    if sys.platform == "win32" and not get_settings().print_command:
        # The shell keeps reading the file after startfile returns.
        os.startfile(path, "print")  # type: ignore[attr-defined]
        atexit.register(shutil.rmtree, tmp_dir, ignore_errors=True)
        logger.info("Sent %s to the default printer", filename)
        return str(path)

    try:
        command = [*_print_command(printer), str(path)]
        result = subprocess.run(command, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise PrintUnavailableError(f"Print command failed: {detail}") from exc
    except FileNotFoundError as exc:
        raise PrintUnavailableError(f"Print command not found: {exc.filename}") from exc
    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)

    output = result.stdout.strip()
    logger.info("Print job submitted: %s", output or filename)
    return output
