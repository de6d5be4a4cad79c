from __future__ import annotations

from copy import copy
from datetime import date, datetime, time

from openpyxl.styles import Color, Font, PatternFill
from openpyxl.worksheet.views import Selection
from openpyxl.worksheet.worksheet import Worksheet

from sheetkit.cells import cell_text
from sheetkit.models import HeaderStyle
from sheetkit.shared.a1 import column_index_to_label, normalize_cell, to_a1

_DEFAULT_COLUMN_WIDTH = 8.43
_DATE_DISPLAY_LENGTH = 10


def build_header_font(style: HeaderStyle, base: Font | None = None) -> Font:
    font = copy(base) if base is not None else Font()
    font.bold = style.bold
    font.color = style.font_color
    return font


def build_header_fill(style: HeaderStyle) -> PatternFill:
    return PatternFill(
        fill_type=style.fill_type,
        fgColor=Color(theme=style.fill_fg_theme),
        bgColor=Color(theme=style.fill_bg_theme),
    )


def apply_header_style(sheet: Worksheet, width: int, style: HeaderStyle) -> None:
    """Style row 1 across columns ``1..width``."""
    fill = build_header_fill(style)
    for column in range(1, width + 1):
        cell = sheet.cell(row=1, column=column)
        cell.font = build_header_font(style, cell.font)
        cell.fill = copy(fill)


def _text_display_length(value: object) -> int:
    if isinstance(value, datetime | date | time):
        return _DATE_DISPLAY_LENGTH
    text = cell_text(value)
    return max((len(line) for line in text.splitlines()), default=0)


def _clamp_column_width(
    width: float, *, min_width: float | None, max_width: float | None
) -> float:
    """Clamp a column width by optional lower/upper bounds."""
    clamped = width
    if min_width is not None and clamped < min_width:
        clamped = min_width
    if max_width is not None and clamped > max_width:
        clamped = max_width
    return float(clamped)


def auto_fit_columns(
    sheet: Worksheet,
    columns: range,
    *,
    min_width: float | None = None,
    max_width: float | None = None,
) -> dict[str, float]:
    """Size columns from their longest text using a ``len + 2`` estimate.

    Returns:
        Applied width per column letter.
    """
    targets = set(columns)
    max_lengths: dict[int, int] = {}
    for row in sheet.iter_rows():
        for cell in row:
            if cell.column not in targets or cell.value is None:
                continue
            length = _text_display_length(cell.value)
            if length > max_lengths.get(cell.column, 0):
                max_lengths[cell.column] = length
    applied: dict[str, float] = {}
    for column in columns:
        label = column_index_to_label(column)
        max_len = max_lengths.get(column, 0)
        estimated = float(max_len + 2) if max_len > 0 else _DEFAULT_COLUMN_WIDTH
        width = _clamp_column_width(estimated, min_width=min_width, max_width=max_width)
        sheet.column_dimensions[label].width = width
        applied[label] = width
    return applied


def freeze_panes(sheet: Worksheet, rows: int, columns: int) -> str | None:
    """Freeze the leading ``rows`` and ``columns``; returns the split cell."""
    # the setter appends pane selections, so start from a single one
    sheet.sheet_view.selection = [Selection()]
    if rows == 0 and columns == 0:
        sheet.freeze_panes = None
        return None
    top_left = to_a1(rows + 1, columns + 1)
    sheet.freeze_panes = top_left
    return top_left


def set_active_cell(sheet: Worksheet, cell: str) -> str:
    """Select ``cell`` in the sheet's active pane."""
    coordinate = normalize_cell(cell)
    # freeze_panes appends the active pane's selection last
    selection = sheet.sheet_view.selection[-1]
    selection.activeCell = coordinate
    selection.sqref = coordinate
    return coordinate
