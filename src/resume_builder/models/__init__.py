"""Data models and type definitions"""

from resume_builder.models.errors import (
    ExportCancelledError,
    ExportDivergenceError,
    ExportEncodingError,
    MeasurementNotReadyError,
    PrintUnavailableError,
    SurfaceBusyError,
)
from resume_builder.models.pagination import (
    LayoutContext,
    MeasuredHeights,
    PageAssignment,
    PageLayout,
    Section,
    SectionSlice,
)

__all__ = [
    "ExportCancelledError",
    "ExportDivergenceError",
    "ExportEncodingError",
    "LayoutContext",
    "MeasuredHeights",
    "MeasurementNotReadyError",
    "PageAssignment",
    "PageLayout",
    "PrintUnavailableError",
    "Section",
    "SectionSlice",
    "SurfaceBusyError",
]
