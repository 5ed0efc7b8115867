"""Exceptions raised by the layout engine and the export pipeline."""

from __future__ import annotations


class MeasurementNotReadyError(RuntimeError):
    """Raised when measurement is requested before the render surface is mounted."""


class SurfaceBusyError(RuntimeError):
    """Raised when the render surface is owned by another operation."""

    def __init__(self, requested_by: str, owner: str) -> None:
        super().__init__(f"Render surface is busy ({owner}); cannot start {requested_by}")
        self.requested_by = requested_by
        self.owner = owner


class ExportDivergenceError(RuntimeError):
    """Raised when an export would render under different layout conditions than the preview."""


class ExportEncodingError(RuntimeError):
    """Raised when a page cannot be encoded into the output document."""

    user_message = "Download failed, please try again."


class ExportCancelledError(RuntimeError):
    """Raised when an in-flight export is abandoned because the resume changed."""


class PrintUnavailableError(RuntimeError):
    """Raised when no print facility is available on this platform."""
