"""Case-insensitive worksheet management on an open openpyxl workbook."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from uuid import uuid4

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from sheetkit.errors import SheetNotFoundError, SheetStateError

logger = logging.getLogger(__name__)


def normalize_sheet_name(sheet_name: str) -> str:
    """Normalize sheet name text for case-insensitive comparison."""
    return sheet_name.casefold()


class SheetIndex:
    """Worksheets of one workbook keyed by normalized name.

    The index must be the only thing adding or removing sheets while it is in
    use, otherwise it goes stale.
    """

    def __init__(self, workbook: Workbook) -> None:
        self._workbook = workbook
        self._sheets: dict[str, Worksheet] = {
            normalize_sheet_name(ws.title): ws for ws in workbook.worksheets
        }

    def __len__(self) -> int:
        return len(self._sheets)

    def __contains__(self, sheet_name: object) -> bool:
        return (
            isinstance(sheet_name, str)
            and normalize_sheet_name(sheet_name) in self._sheets
        )

    def __iter__(self) -> Iterator[Worksheet]:
        return iter(self._workbook.worksheets)

    def names(self) -> list[str]:
        """Return sheet titles in workbook order."""
        return [ws.title for ws in self._workbook.worksheets]

    def get(self, sheet_name: str) -> Worksheet | None:
        return self._sheets.get(normalize_sheet_name(sheet_name))

    def require(self, sheet_name: str) -> Worksheet:
        sheet = self.get(sheet_name)
        if sheet is None:
            raise SheetNotFoundError(sheet_name)
        return sheet

    def add(self, sheet_name: str) -> Worksheet:
        """Append a new sheet.

        Raises:
            SheetStateError: If a sheet with the same normalized name exists.
        """
        if sheet_name in self:
            raise SheetStateError(f"Sheet already exists: {sheet_name}")
        sheet = self._workbook.create_sheet(title=sheet_name)
        self._sheets[normalize_sheet_name(sheet.title)] = sheet
        logger.debug("Added sheet %s", sheet.title)
        return sheet

    def rename(self, sheet_name: str, new_name: str) -> Worksheet:
        sheet = self.require(sheet_name)
        existing = self.get(new_name)
        if existing is not None and existing is not sheet:
            raise SheetStateError(f"Sheet already exists: {new_name}")
        del self._sheets[normalize_sheet_name(sheet.title)]
        if normalize_sheet_name(new_name) == normalize_sheet_name(sheet.title):
            # openpyxl de-duplicates titles against the sheet's own current name
            sheet.title = f"~{uuid4().hex[:12]}"
        sheet.title = new_name
        self._sheets[normalize_sheet_name(sheet.title)] = sheet
        return sheet

    def remove(self, sheet_name: str) -> None:
        """Delete a sheet, moving the active selection off it first.

        Raises:
            SheetNotFoundError: If no sheet matches.
            SheetStateError: If it is the only sheet left.
        """
        sheet = self.require(sheet_name)
        if len(self._sheets) == 1:
            raise SheetStateError("Can not delete the sole worksheet.")
        replacement = next(ws for ws in self._workbook.worksheets if ws is not sheet)
        self._workbook.remove(sheet)
        del self._sheets[normalize_sheet_name(sheet.title)]
        self.activate(replacement.title)
        logger.debug("Removed sheet %s", sheet.title)

    def activate(self, sheet_name: str) -> Worksheet:
        sheet = self.require(sheet_name)
        for ws in self._workbook.worksheets:
            ws.sheet_view.tabSelected = ws is sheet
        self._workbook.active = sheet
        return sheet


def clear_sheet(sheet: Worksheet) -> None:
    """Remove every cell, merge and column width so the sheet starts over."""
    for merged in list(sheet.merged_cells.ranges):
        sheet.unmerge_cells(str(merged))
    if sheet.max_row >= 1:
        sheet.delete_rows(1, sheet.max_row)
    sheet.column_dimensions.clear()
