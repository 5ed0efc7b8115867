"""Styled content fragments and the routines that measure and draw them.

A template turns resume data into :class:`Block` values; nothing here
knows about sections or pages. Measuring and drawing share
:func:`_row_height`, so a block always occupies exactly the height it
was measured at.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fpdf.enums import MethodReturnValue

if TYPE_CHECKING:
    from fpdf import FPDF

__all__ = [
    "BLACK",
    "WHITE",
    "Block",
    "Color",
    "PageFragment",
    "RuleRow",
    "SplitRow",
    "TextRun",
    "draw_block",
    "draw_fragment",
    "measure_block",
]

Color = tuple[int, int, int]
ColorResolver = Callable[[Color], Color]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)

# Vertical room taken by a bottom rule, line drawn in the middle.
RULE_SPACE = 8.0
RULE_WIDTH = 0.75


def _identity(color: Color) -> Color:
    return color


@dataclass(frozen=True)
class TextRun:
    """A paragraph of text wrapped to the available width."""

    text: str
    size: float = 10.0
    style: str = ""
    color: Color = BLACK
    align: str = "L"
    leading: float = 1.4
    indent: float = 0.0
    space_before: float = 0.0


@dataclass(frozen=True)
class SplitRow:
    """Two runs sharing a line: *left* wraps, *right* is right-aligned."""

    left: TextRun
    right: TextRun
    gap: float = 12.0


@dataclass(frozen=True)
class RuleRow:
    """A horizontal line centred in *space* pixels of vertical room."""

    color: Color
    space: float = RULE_SPACE


Row = TextRun | SplitRow | RuleRow


@dataclass(frozen=True)
class Block:
    """An indivisible stack of rows with optional background and bottom rule."""

    rows: tuple[Row, ...]
    family: str = "Helvetica"
    padding: float = 0.0
    fill: Color | None = None
    rule: Color | None = None
    space_after: float = 0.0


@dataclass(frozen=True)
class PageFragment:
    """Everything drawn on one page: a page header followed by body blocks."""

    page_number: int
    is_first_page: bool
    header: Block
    body: tuple[Block, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


def _run_height(pdf: FPDF, family: str, run: TextRun, width: float) -> float:
    if not run.text:
        return 0.0
    pdf.set_font(family, style=run.style, size=run.size)
    line_height = pdf.font_size * run.leading
    height = pdf.multi_cell(
        max(width - run.indent, 1.0),
        line_height,
        text=run.text,
        align=run.align,
        dry_run=True,
        output=MethodReturnValue.HEIGHT,
    )
    return run.space_before + height


def _right_width(pdf: FPDF, family: str, run: TextRun) -> float:
    if not run.text:
        return 0.0
    pdf.set_font(family, style=run.style, size=run.size)
    # Padding keeps fpdf's cell margins from wrapping the text.
    return pdf.get_string_width(run.text) + 2 * pdf.c_margin + 1.0


def _split_widths(pdf: FPDF, family: str, row: SplitRow, width: float) -> tuple[float, float]:
    right = min(_right_width(pdf, family, row.right), width / 2)
    left = width - right - (row.gap if right else 0.0)
    return left, right


def _row_height(pdf: FPDF, family: str, row: Row, width: float) -> float:
    if isinstance(row, RuleRow):
        return row.space
    if isinstance(row, SplitRow):
        left_w, right_w = _split_widths(pdf, family, row, width)
        return max(
            _run_height(pdf, family, row.left, left_w),
            _run_height(pdf, family, row.right, right_w),
        )
    return _run_height(pdf, family, row, width)


def _content_height(pdf: FPDF, block: Block, width: float) -> float:
    inner = width - 2 * block.padding
    rows = sum(_row_height(pdf, block.family, row, inner) for row in block.rows)
    return rows + 2 * block.padding


def measure_block(pdf: FPDF, block: Block, width: float) -> float:
    """Return the height *block* occupies when laid out at *width*."""
    height = _content_height(pdf, block, width)
    if block.rule is not None:
        height += RULE_SPACE
    return height + block.space_after


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


def _draw_run(
    pdf: FPDF,
    family: str,
    run: TextRun,
    x: float,
    y: float,
    width: float,
    resolve: ColorResolver,
) -> None:
    if not run.text:
        return
    pdf.set_font(family, style=run.style, size=run.size)
    pdf.set_text_color(*resolve(run.color))
    pdf.set_xy(x + run.indent, y + run.space_before)
    pdf.multi_cell(
        max(width - run.indent, 1.0),
        pdf.font_size * run.leading,
        text=run.text,
        align=run.align,
    )


def _draw_rule(
    pdf: FPDF, color: Color, x: float, y: float, width: float, resolve: ColorResolver
) -> None:
    pdf.set_draw_color(*resolve(color))
    pdf.set_line_width(RULE_WIDTH)
    pdf.line(x, y, x + width, y)


def draw_block(
    pdf: FPDF,
    block: Block,
    x: float,
    y: float,
    width: float,
    resolve: ColorResolver = _identity,
) -> float:
    """Draw *block* with its top-left corner at (*x*, *y*).

    Returns:
        The height consumed, identical to :func:`measure_block`.
    """
    content_height = _content_height(pdf, block, width)
    if block.fill is not None:
        pdf.set_fill_color(*resolve(block.fill))
        pdf.rect(x, y, width, content_height, style="F")

    inner_x = x + block.padding
    inner_w = width - 2 * block.padding
    cursor = y + block.padding
    for row in block.rows:
        row_height = _row_height(pdf, block.family, row, inner_w)
        if isinstance(row, RuleRow):
            _draw_rule(pdf, row.color, inner_x, cursor + row.space / 2, inner_w, resolve)
        elif isinstance(row, SplitRow):
            left_w, right_w = _split_widths(pdf, block.family, row, inner_w)
            _draw_run(pdf, block.family, row.left, inner_x, cursor, left_w, resolve)
            if right_w:
                right_x = inner_x + inner_w - right_w
                _draw_run(pdf, block.family, row.right, right_x, cursor, right_w, resolve)
        else:
            _draw_run(pdf, block.family, row, inner_x, cursor, inner_w, resolve)
        cursor += row_height

    height = content_height
    if block.rule is not None:
        _draw_rule(pdf, block.rule, x, y + content_height + RULE_SPACE / 2, width, resolve)
        height += RULE_SPACE
    return height + block.space_after


def draw_fragment(
    pdf: FPDF,
    fragment: PageFragment,
    x: float,
    y: float,
    width: float,
    resolve: ColorResolver = _identity,
) -> float:
    """Draw a whole page fragment top-down and return the height used."""
    cursor = y + draw_block(pdf, fragment.header, x, y, width, resolve)
    for block in fragment.body:
        cursor += draw_block(pdf, block, x, cursor, width, resolve)
    return cursor - y
