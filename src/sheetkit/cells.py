from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, time

from openpyxl.worksheet.worksheet import Worksheet

from sheetkit.models import FoundItem, SearchRequest, SheetExtent
from sheetkit.shared.a1 import column_index_to_label, normalize_cell
from sheetkit.types import CellValue


def _is_blank_cell_value(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value == ""


def cell_text(value: object) -> str:
    """Render a cell value the way it is compared and reported as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return str(value)


def sheet_extent(sheet: Worksheet) -> SheetExtent:
    """Return the last row and column that hold a non-blank value."""
    end_row = 0
    end_column = 0
    for row in sheet.iter_rows():
        for cell in row:
            if _is_blank_cell_value(cell.value):
                continue
            end_row = max(end_row, cell.row)
            end_column = max(end_column, cell.column)
    return SheetExtent(end_row=end_row, end_column=end_column)


def used_column_labels(sheet: Worksheet) -> list[str]:
    """Return letters from ``A`` up to the last used column."""
    extent = sheet_extent(sheet)
    return [column_index_to_label(index) for index in range(1, extent.end_column + 1)]


def column_texts(sheet: Worksheet, column: int) -> list[str]:
    """Return the text of each cell in ``column`` for rows 1..last used row."""
    extent = sheet_extent(sheet)
    return [
        cell_text(sheet.cell(row=row, column=column).value)
        for row in range(1, extent.end_row + 1)
    ]


def _matches(text: str, request: SearchRequest) -> bool:
    token = request.token
    if not request.case_sensitive:
        text = text.casefold()
        token = token.casefold()
    if request.match == "contains":
        return token in text
    return text == token


def iter_text_matches(sheet: Worksheet, request: SearchRequest) -> Iterator[FoundItem]:
    """Yield matching cells column by column, top to bottom."""
    extent = sheet_extent(sheet)
    for column in range(1, extent.end_column + 1):
        column_name = column_index_to_label(column)
        for row in range(1, extent.end_row + 1):
            value = sheet.cell(row=row, column=column).value
            if _matches(cell_text(value), request):
                yield FoundItem(row=row, column=column, column_name=column_name)


def write_cell(sheet: Worksheet, cell: str, value: CellValue) -> str:
    """Write ``value`` at an A1 reference and return the normalized reference."""
    coordinate = normalize_cell(cell)
    sheet[coordinate] = value
    return coordinate
