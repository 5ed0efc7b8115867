"""The single render surface shared by measurement, preview and export.

The surface owns the page geometry and the registered fonts, which
together with the style variant decide every measured height. Only one
operation may own it at a time; colour overrides are applied in a scope
and always restored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from fpdf import FPDF

from resume_builder.config import get_settings
from resume_builder.constants.layout_constants import PX_UNIT, page_height_for_width
from resume_builder.models.errors import SurfaceBusyError
from resume_builder.models.pagination import LayoutContext
from resume_builder.templates.fragment import Color

__all__ = ["RenderSurface", "grayscale"]

logger = logging.getLogger(__name__)

ColorTransform = Callable[[Color], Color]


def grayscale(color: Color) -> Color:
    """Map *color* to its luminance grey."""
    r, g, b = color
    level = round(0.299 * r + 0.587 * g + 0.114 * b)
    return (level, level, level)


class RenderSurface:
    """Geometry, fonts and ownership of the document being laid out."""

    def __init__(
        self,
        page_width: float | None = None,
        margin: float | None = None,
        *,
        mounted: bool = True,
    ) -> None:
        settings = get_settings()
        self._margin = float(margin if margin is not None else settings.page_margin)
        self._page_width = self._checked_width(
            page_width if page_width is not None else settings.page_width
        )
        self._mounted = mounted
        self._owner: str | None = None
        self._fonts: dict[str, dict[str, str]] = {}
        self._color_transform: ColorTransform | None = None
        self._mount_listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def page_width(self) -> float:
        return self._page_width

    @property
    def page_height(self) -> float:
        return page_height_for_width(self._page_width)

    @property
    def margin(self) -> float:
        return self._margin

    @property
    def content_width(self) -> float:
        return self._page_width - 2 * self._margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self._margin

    def resize(self, page_width: float) -> None:
        """Change the page width; the height follows the A-series ratio."""
        self._page_width = self._checked_width(page_width)

    def _checked_width(self, page_width: float) -> float:
        if page_width <= 2 * self._margin:
            msg = f"Page width {page_width} leaves no room inside {self._margin}px margins"
            raise ValueError(msg)
        return float(page_width)

    def context(self, template_key: str) -> LayoutContext:
        """Return the conditions a measurement taken now would be valid for."""
        return LayoutContext(
            page_width=self._page_width,
            page_height=self.page_height,
            margin=self._margin,
            template_key=template_key,
            font_signature=self.font_signature,
        )

    # ------------------------------------------------------------------
    # Mount state
    # ------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Mark the surface ready and notify anyone waiting to measure."""
        if self._mounted:
            return
        self._mounted = True
        for listener in list(self._mount_listeners):
            listener()

    def unmount(self) -> None:
        self._mounted = False

    def add_mount_listener(self, listener: Callable[[], None]) -> None:
        self._mount_listeners.append(listener)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def register_font(self, family: str, path: str | Path, style: str = "") -> None:
        """Register a TrueType font used by custom variants.

        Changes the font signature, so earlier measurements become stale.
        """
        font_path = Path(path)
        if not font_path.is_file():
            msg = f"Font file not found: {font_path}"
            raise FileNotFoundError(msg)
        self._fonts.setdefault(family, {})[style.upper()] = str(font_path)

    @property
    def font_signature(self) -> tuple[str, ...]:
        return tuple(
            f"{family}:{style}:{path}"
            for family, styles in sorted(self._fonts.items())
            for style, path in sorted(styles.items())
        )

    # ------------------------------------------------------------------
    # Ownership and scoped mutation
    # ------------------------------------------------------------------

    @property
    def owner(self) -> str | None:
        return self._owner

    @property
    def is_busy(self) -> bool:
        return self._owner is not None

    @contextmanager
    def claim(self, owner: str) -> Iterator[RenderSurface]:
        """Own the surface for the duration of the ``with`` block.

        Raises:
            SurfaceBusyError: If another operation already owns it.
        """
        if self._owner is not None:
            raise SurfaceBusyError(owner, self._owner)
        self._owner = owner
        try:
            yield self
        finally:
            self._owner = None

    @contextmanager
    def override_colors(self, transform: ColorTransform | None) -> Iterator[None]:
        """Apply *transform* to every drawn colour until the block exits."""
        previous = self._color_transform
        self._color_transform = transform
        try:
            yield
        finally:
            self._color_transform = previous

    @property
    def color_transform(self) -> ColorTransform | None:
        return self._color_transform

    def resolve_color(self, color: Color) -> Color:
        if self._color_transform is None:
            return color
        return self._color_transform(color)

    # ------------------------------------------------------------------
    # Canvases
    # ------------------------------------------------------------------

    def new_canvas(self) -> FPDF:
        """Return a one-page canvas with this surface's geometry and fonts."""
        pdf = FPDF(orientation="P", unit=PX_UNIT, format=(self._page_width, self.page_height))
        pdf.set_margins(self._margin, self._margin, self._margin)
        pdf.set_auto_page_break(auto=False)
        for family, styles in self._fonts.items():
            for style, path in styles.items():
                pdf.add_font(family, style=style, fname=path)
        pdf.add_page()
        return pdf
