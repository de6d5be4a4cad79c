"""Tab-delimited text import into a named sheet with a fixed header layout."""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path

from openpyxl import Workbook

from sheetkit.cells import sheet_extent
from sheetkit.core.workbook import DEFAULT_SHEET_NAME
from sheetkit.errors import SheetStateError, WorkbookIOError
from sheetkit.models import ImportOptions, ImportSummary
from sheetkit.sheets import SheetIndex, clear_sheet
from sheetkit.styles import (
    apply_header_style,
    auto_fit_columns,
    freeze_panes,
    set_active_cell,
)
from sheetkit.types import CellValue

logger = logging.getLogger(__name__)


def read_records(source_path: Path, options: ImportOptions) -> list[list[str]]:
    """Read every line of the source file split on the delimiter.

    Raises:
        WorkbookIOError: If the file is missing or has no header line.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the text does not match ``options.encoding``.
    """
    if not source_path.is_file():
        raise WorkbookIOError(f"Source text not found: {source_path}")
    with source_path.open(encoding=options.encoding, newline="") as handle:
        reader = csv.reader(
            handle, delimiter=options.delimiter, quoting=csv.QUOTE_NONE
        )
        records = [list(record) for record in reader]
    if not records or not any(field for field in records[0]):
        raise WorkbookIOError(f"Source text has no header line: {source_path}")
    return records


def _convert_field(value: str) -> CellValue:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def _shape_records(
    records: list[list[str]], header_width: int, options: ImportOptions
) -> tuple[list[list[str]], list[str]]:
    """Apply the ragged-row policy against the header width."""
    wide_rows = [
        index
        for index, record in enumerate(records, start=1)
        if len(record) > header_width
    ]
    if not wide_rows or options.ragged_rows == "keep":
        return records, []
    if options.ragged_rows == "error":
        raise SheetStateError(
            f"Row {wide_rows[0]} has more fields than the header ({header_width})."
        )
    message = (
        f"{len(wide_rows)} row(s) wider than the header were truncated to "
        f"{header_width} column(s); first at row {wide_rows[0]}."
    )
    logger.warning(message)
    return [record[:header_width] for record in records], [message]


def import_records(
    workbook: Workbook,
    sheet_name: str,
    records: list[list[str]],
    options: ImportOptions,
    *,
    out_path: Path,
) -> ImportSummary:
    """Write records into ``sheet_name`` and lay the sheet out.

    The first record is the header. An existing sheet (matched
    case-insensitively) is cleared before loading; the empty ``Sheet1``
    placeholder is dropped when it is not the target.
    """
    header_width = len(records[0])
    rows, warnings = _shape_records(records, header_width, options)

    index = SheetIndex(workbook)
    sheet = index.get(sheet_name)
    replaced_existing = sheet is not None
    if sheet is not None:
        clear_sheet(sheet)
    else:
        sheet = index.add(sheet_name)

    for row_index, record in enumerate(rows, start=1):
        for column_index, field in enumerate(record, start=1):
            if field == "":
                continue
            value = _convert_field(field) if options.convert_numbers else field
            sheet.cell(row=row_index, column=column_index, value=value)

    removed_placeholder = False
    placeholder = index.get(DEFAULT_SHEET_NAME)
    if (
        placeholder is not None
        and placeholder is not sheet
        and len(index) > 1
        and sheet_extent(placeholder).end_row == 0
    ):
        index.remove(placeholder.title)
        removed_placeholder = True

    apply_header_style(sheet, header_width, options.header_style)
    extent = sheet_extent(sheet)
    auto_fit_columns(
        sheet,
        range(1, max(extent.end_column, header_width) + 1),
        min_width=options.min_width,
        max_width=options.max_width,
    )
    freeze_panes(sheet, options.freeze_rows, options.freeze_columns)
    set_active_cell(sheet, options.active_cell)
    index.activate(sheet.title)

    logger.debug(
        "Imported %d row(s) x %d column(s) into %s",
        extent.end_row,
        extent.end_column,
        sheet.title,
    )
    return ImportSummary(
        out_path=str(out_path),
        sheet=sheet.title,
        rows=extent.end_row,
        columns=extent.end_column,
        header_width=header_width,
        replaced_existing=replaced_existing,
        removed_placeholder=removed_placeholder,
        warnings=warnings,
    )
