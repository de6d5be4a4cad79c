"""Path-level workbook operations.

Each function opens its own workbook, does one thing, saves at most once and
returns an :class:`~sheetkit.models.OperationResult`. Nothing raises past this
module; failures come back as ``result.error`` with an ``io_error``,
``state_error`` or ``library_error`` kind.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
from typing import TypeVar

from sheetkit.cells import (
    column_texts,
    iter_text_matches,
    sheet_extent,
    used_column_labels,
    write_cell,
)
from sheetkit.core.workbook import new_workbook, openpyxl_workbook, save_workbook
from sheetkit.errors import SheetStateError
from sheetkit.models import (
    FoundItem,
    ImportOptions,
    ImportSummary,
    OperationError,
    OperationResult,
    SearchRequest,
    SheetExtent,
)
from sheetkit.shared.a1 import resolve_column
from sheetkit.shared.output_path import ensure_creatable_extension
from sheetkit.sheets import SheetIndex
from sheetkit.text_import import import_records, read_records
from sheetkit.types import CellValue, OperationName

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _guarded(
    operation: OperationName,
    action: Callable[[], T],
    *,
    path: Path | str | None,
    sheet: str | None = None,
) -> OperationResult[T]:
    """Run ``action`` and fold any exception into the result."""
    try:
        value = action()
    except Exception as exc:
        error = OperationError.from_exception(operation, exc, path=path, sheet=sheet)
        logger.warning("%s failed (%s): %s", operation, error.kind, error.message)
        return OperationResult(operation=operation, error=error)
    return OperationResult(operation=operation, value=value)


def create_new_file(
    path: Path | str, sheet_name: str | None = None
) -> OperationResult[bool]:
    """Create a workbook at ``path``, overwriting any existing file.

    The default ``Sheet1`` is renamed to ``sheet_name`` when one is given.
    New ``.xlsm`` workbooks are rejected with an ``io_error``.
    """
    target = Path(path)

    def _create() -> bool:
        ensure_creatable_extension(target)
        workbook = new_workbook()
        try:
            if sheet_name:
                SheetIndex(workbook).rename(workbook.worksheets[0].title, sheet_name)
            save_workbook(workbook, target)
        finally:
            workbook.close()
        return True

    return _guarded("create_new_file", _create, path=target, sheet=sheet_name)


def add_sheet(path: Path | str, sheet_name: str) -> OperationResult[bool]:
    """Append ``sheet_name`` unless a sheet with that name already exists."""
    target = Path(path)

    def _add() -> bool:
        with openpyxl_workbook(target) as workbook:
            index = SheetIndex(workbook)
            if sheet_name in index:
                return False
            index.add(sheet_name)
            save_workbook(workbook, target)
        return True

    return _guarded("add_sheet", _add, path=target, sheet=sheet_name)


def remove_sheet(path: Path | str, sheet_name: str) -> OperationResult[bool]:
    """Delete ``sheet_name``; removing the only sheet is a ``state_error``."""
    target = Path(path)

    def _remove() -> bool:
        with openpyxl_workbook(target) as workbook:
            index = SheetIndex(workbook)
            if sheet_name not in index:
                return False
            index.remove(sheet_name)
            save_workbook(workbook, target)
        return True

    return _guarded("remove_sheet", _remove, path=target, sheet=sheet_name)


def sheet_names(path: Path | str) -> OperationResult[list[str]]:
    target = Path(path)

    def _names() -> list[str]:
        with openpyxl_workbook(target) as workbook:
            return SheetIndex(workbook).names()

    return _guarded("sheet_names", _names, path=target)


def sheet_exists(path: Path | str, sheet_name: str) -> OperationResult[bool]:
    target = Path(path)

    def _exists() -> bool:
        with openpyxl_workbook(target) as workbook:
            return sheet_name in SheetIndex(workbook)

    return _guarded("sheet_exists", _exists, path=target, sheet=sheet_name)


def set_cell_value(
    path: Path | str, sheet_name: str, cell: str, value: CellValue
) -> OperationResult[bool]:
    """Write one cell of an existing sheet and save."""
    target = Path(path)

    def _set() -> bool:
        with openpyxl_workbook(target) as workbook:
            sheet = SheetIndex(workbook).require(sheet_name)
            write_cell(sheet, cell, value)
            save_workbook(workbook, target)
        return True

    return _guarded("set_cell_value", _set, path=target, sheet=sheet_name)


def find_text(request: SearchRequest) -> OperationResult[list[FoundItem]]:
    """Locate cells whose text matches ``request.token``.

    On failure the matches collected so far are returned with the error.
    """
    found: list[FoundItem] = []
    try:
        with openpyxl_workbook(request.path, data_only=True) as workbook:
            sheet = SheetIndex(workbook).require(request.sheet)
            for item in iter_text_matches(sheet, request):
                found.append(item)
    except Exception as exc:
        error = OperationError.from_exception(
            "find_text", exc, path=request.path, sheet=request.sheet
        )
        logger.warning("find_text failed (%s): %s", error.kind, error.message)
        return OperationResult[list[FoundItem]](
            operation="find_text", value=found, error=error
        )
    return OperationResult[list[FoundItem]](operation="find_text", value=found)


def last_row_column(path: Path | str, sheet_name: str) -> OperationResult[SheetExtent]:
    """Return the last used row and column of a sheet."""
    target = Path(path)

    def _extent() -> SheetExtent:
        with openpyxl_workbook(target, data_only=True) as workbook:
            return sheet_extent(SheetIndex(workbook).require(sheet_name))

    return _guarded("last_row_column", _extent, path=target, sheet=sheet_name)


def last_row(path: Path | str, sheet_name: str) -> OperationResult[int]:
    target = Path(path)

    def _last_row() -> int:
        with openpyxl_workbook(target, data_only=True) as workbook:
            return sheet_extent(SheetIndex(workbook).require(sheet_name)).end_row

    return _guarded("last_row", _last_row, path=target, sheet=sheet_name)


def used_columns(path: Path | str, sheet_name: str) -> OperationResult[list[str]]:
    """Return column letters ``A..`` through the last used column."""
    target = Path(path)

    def _columns() -> list[str]:
        with openpyxl_workbook(target, data_only=True) as workbook:
            return used_column_labels(SheetIndex(workbook).require(sheet_name))

    return _guarded("used_columns", _columns, path=target, sheet=sheet_name)


def read_column(
    path: Path | str, sheet_name: str, column: str | int = 1
) -> OperationResult[list[str]]:
    """Return the text of each cell in one column down to the last used row."""
    target = Path(path)

    def _read() -> list[str]:
        column_index = resolve_column(column)
        with openpyxl_workbook(target, data_only=True) as workbook:
            return column_texts(SheetIndex(workbook).require(sheet_name), column_index)

    return _guarded("read_column", _read, path=target, sheet=sheet_name)


def import_tab_delimited(
    source_path: Path | str,
    workbook_path: Path | str,
    sheet_name: str,
    options: ImportOptions | None = None,
) -> OperationResult[ImportSummary]:
    """Import a tab-delimited text file into ``sheet_name`` of a workbook.

    The workbook is opened when it exists and created otherwise. It is saved
    once at the end, so any failure leaves the file on disk untouched.
    """
    source = Path(source_path)
    target = Path(workbook_path)
    effective = options or ImportOptions()

    def _import() -> ImportSummary:
        if not sheet_name:
            raise SheetStateError("Target sheet name is empty.")
        records = read_records(source, effective)
        with openpyxl_workbook(target, create=True) as workbook:
            summary = import_records(
                workbook, sheet_name, records, effective, out_path=target
            )
            save_workbook(workbook, target)
        logger.info(
            "Imported %s into %s!%s (%d rows)",
            source.name,
            target.name,
            summary.sheet,
            summary.rows,
        )
        return summary

    result = _guarded("import_tab_delimited", _import, path=target, sheet=sheet_name)
    if result.value is not None:
        result.warnings.extend(result.value.warnings)
    return result
